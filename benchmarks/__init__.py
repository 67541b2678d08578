"""
Benchmark suite for kvjson parsing performance.

Compares kvjson.deserialize against the standard library json module,
orjson and ujson on documents shaped like key/value store payloads.
"""
