from oasgraph.openapi.loaders import from_dict, from_file, from_path

__all__ = ["from_dict", "from_file", "from_path"]
