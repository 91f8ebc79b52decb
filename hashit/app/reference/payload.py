"""
Embedded known-file reference dataset.

Base64 wrapped JSON mapping canonical file names to their digests
(``MD5``, ``SHA1``, ``SHA256``, ``SHA512``). Regenerated at build time; do
not edit by hand.
"""

EMBEDDED_PAYLOAD = (
    "eyJlbXB0eS1maWxlIjp7Ik1ENSI6ImQ0MWQ4Y2Q5OGYwMGIyMDRlOTgwMDk5OGVjZjg0Mjdl"
    "IiwiU0hBMSI6ImRhMzlhM2VlNWU2YjRiMGQzMjU1YmZlZjk1NjAxODkwYWZkODA3MDkiLCJT"
    "SEEyNTYiOiJlM2IwYzQ0Mjk4ZmMxYzE0OWFmYmY0Yzg5OTZmYjkyNDI3YWU0MWU0NjQ5Yjkz"
    "NGNhNDk1OTkxYjc4NTJiODU1IiwiU0hBNTEyIjoiY2Y4M2UxMzU3ZWVmYjhiZGYxNTQyODUw"
    "ZDY2ZDgwMDdkNjIwZTQwNTBiNTcxNWRjODNmNGE5MjFkMzZjZTljZTQ3ZDBkMTNjNWQ4NWYy"
    "YjBmZjgzMThkMjg3N2VlYzJmNjNiOTMxYmQ0NzQxN2E4MWE1MzgzMjdhZjkyN2RhM2UifSwi"
    "ZWljYXIuY29tIjp7Ik1ENSI6IjQ0ZDg4NjEyZmVhOGE4ZjM2ZGU4MmUxMjc4YWJiMDJmIiwi"
    "U0hBMSI6IjMzOTU4NTZjZTgxZjJiNzM4MmRlZTcyNjAyZjc5OGI2NDJmMTQxNDAiLCJTSEEy"
    "NTYiOiIyNzVhMDIxYmJmYjY0ODllNTRkNDcxODk5ZjdkYjlkMTY2M2ZjNjk1ZWMyZmUyYTJj"
    "NDUzOGFhYmY2NTFmZDBmIn0sImhlbGxvLXdvcmxkLnR4dCI6eyJNRDUiOiI2ZjU5MDJhYzIz"
    "NzAyNGJkZDBjMTc2Y2I5MzA2M2RjNCIsIlNIQTEiOiIyMjU5NjM2M2IzZGU0MGIwNmY5ODFm"
    "Yjg1ZDgyMzEyZThjMGVkNTExIiwiU0hBMjU2IjoiYTk0ODkwNGYyZjBmNDc5YjhmODE5NzY5"
    "NGIzMDE4NGIwZDJlZDFjMWNkMmExZWMwZmI4NWQyOTlhMTkyYTQ0NyIsIlNIQTUxMiI6ImRi"
    "Mzk3NGE5N2YyNDA3YjdjYWUxYWU2MzdjMDAzMDY4N2ExMTkxMzI3NGQ1Nzg0OTI1NThlMzlj"
    "MTZjMDE3ZGU4NGVhY2RjOGM2MmZlMzRlZTRlMTJiNGIxNDI4ODE3ZjA5YjZhMjc2MGMzZjhh"
    "NjY0Y2VhZTk0ZDI0MzRhNTkzIn0sImhlbGxvLnR4dCI6eyJNRDUiOiI1ZDQxNDAyYWJjNGIy"
    "YTc2Yjk3MTlkOTExMDE3YzU5MiIsIlNIQTEiOiJhYWY0YzYxZGRjYzVlOGEyZGFiZWRlMGYz"
    "YjQ4MmNkOWFlYTk0MzRkIiwiU0hBMjU2IjoiMmNmMjRkYmE1ZmIwYTMwZTI2ZTgzYjJhYzVi"
    "OWUyOWUxYjE2MWU1YzFmYTc0MjVlNzMwNDMzNjI5MzhiOTgyNCJ9fQ=="
)
