__pyproject__ = """\
[project]
dependencies = ["click"]
"""

import click
