"""Version information for the math visualizer.

Single source of truth for the application version; pyproject.toml and
the dashboard navbar both read it from here.

Versioning scheme: MAJOR.MINOR.BUILD
- MAJOR: Breaking changes to the module descriptor contract
- MINOR: New modules or features
- BUILD: Bug fixes, small improvements
"""

__version__ = "0.4.0"
