__pyproject__ = """
[project]
    """
