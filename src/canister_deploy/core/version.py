from semver import VersionInfo

__version__ = VersionInfo.parse("0.1.0")

VERSION_STRING = f"v{__version__.major}.{__version__.minor}.{__version__.patch}"
