import importlib.metadata

try:
    __version__ = importlib.metadata.version("sentiero")
except importlib.metadata.PackageNotFoundError:
    __version__ = "dev"
