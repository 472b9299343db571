"""
Launch pipeline for Melon Client.

This module provides:
- resolve_identity(): Offline / authenticated player identity
- build_launch_plan(): Java command-line assembly
- VersionRegistry: Game type to version id mapping
- launch(): Full launch attempt (identity, plan, preferences, spawn)

Usage:
    from melon_client.launching import launch, VersionRegistry

    result = launch(request, config=config, registry=VersionRegistry(),
                    max_memory_gb=get_resource_budget())
"""

from .identity import resolve_identity, offline_uuid, is_valid_username
from .command import build_launch_plan
from .versions import VersionRegistry, installation_root
from .auth import PlaceholderAuthenticator, load_profile, save_profile
from .launcher import launch, prepare_launch

# Expose public API
__all__ = [
    'resolve_identity', 'offline_uuid', 'is_valid_username',
    'build_launch_plan',
    'VersionRegistry', 'installation_root',
    'PlaceholderAuthenticator', 'load_profile', 'save_profile',
    'launch', 'prepare_launch',
]
