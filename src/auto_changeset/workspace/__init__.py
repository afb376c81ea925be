"""Repository layout: discovery of the packages of a monorepo."""

from .registry import DiscoveryError, NoPackagesFound, Package, discover_packages  # noqa: F401
