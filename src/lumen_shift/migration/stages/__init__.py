"""Pipeline stages. Importing this package registers every stage."""

from __future__ import annotations

from . import (  # noqa: F401
    s01_resolve_version,
    s02_scaffold,
    s03_copy_tree,
    s04_merge_manifest,
    s05_namespaces,
    s06_rewrite_routes,
    s07_relocate_routes,
    s08_install,
    s09_merge_env,
)
from .s03_copy_tree import copy_tree
from .s04_merge_manifest import merge_manifest_files, merge_manifests
from .s06_rewrite_routes import rewrite_routing
from .s07_relocate_routes import relocate_routes
from .s08_install import find_incompatible_packages, install_dependencies
from .s09_merge_env import merge_env_files, merge_env_vars, parse_env_content, serialize_env

__all__ = [
    "copy_tree",
    "merge_manifests",
    "merge_manifest_files",
    "rewrite_routing",
    "relocate_routes",
    "find_incompatible_packages",
    "install_dependencies",
    "merge_env_files",
    "merge_env_vars",
    "parse_env_content",
    "serialize_env",
]
