"""写路径 payload schema(pydantic)."""
