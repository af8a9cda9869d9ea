__pyproject__ = """
[project]
name = "tool"
version = "1.0"
dynamic = ["version"]
"""
