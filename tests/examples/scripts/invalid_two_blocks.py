__pyproject__ = """
[project]
dependencies = ["requests"]
"""

__pyproject__ = """
[project]
dependencies = ["httpx"]
"""
