"""
Git Multi Repo - Report and synchronize many git working copies at once.

This package runs git status, pull and push against every repository listed
in a JSON configuration file and prints a consolidated summary.
"""

__version__ = "0.1.0"
