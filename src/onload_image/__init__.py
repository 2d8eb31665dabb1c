"""onload-image - OpenOnload Docker image build helper.

Maps an Onload version and an OS flavor onto a ``docker build`` command
line, and optionally runs the build and pushes the result.

Features:
- Built-in catalog of Onload releases and image flavors
- Automatic image tag naming
- Optional execution and push of the generated command
"""

__version__ = "1.0.0"
__license__ = "MIT"

from onload_image.cli import main

__all__ = ["main", "__version__"]
