from importlib import metadata

try:
    OASGRAPH_VERSION = metadata.version("oasgraph")
except metadata.PackageNotFoundError:
    # Local run without installation
    OASGRAPH_VERSION = "dev"
