"""onload-image library modules.

Catalog loading, option parsing, resolution and command building.
"""

__all__ = [
    "catalog",
    "command_builder",
    "dispatcher",
    "errors",
    "executor",
    "options",
    "package_data",
    "resolver",
]
