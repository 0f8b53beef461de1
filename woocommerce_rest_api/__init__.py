from importlib.metadata import version as _pkg_version, PackageNotFoundError as _PkgNotFound

try:
    __version__ = _pkg_version("woocommerce-rest-api")
except _PkgNotFound:
    __version__ = "dev"

from .config import API_VERSIONS, ClientConfiguration, ConfigurationError, load_config
from .client import WooCommerceRestApi, flatten_params
from .transport import HostPlatform, HttpxTransport, Platform, Transport

__all__ = [
    "__version__",
    "API_VERSIONS",
    "ClientConfiguration",
    "ConfigurationError",
    "HostPlatform",
    "HttpxTransport",
    "Platform",
    "Transport",
    "WooCommerceRestApi",
    "flatten_params",
    "load_config",
]
