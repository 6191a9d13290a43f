"""Profile management module for Icy Isaac Mod Manager."""

from .profile_selection import ProfileSelection
from .profile_store import ProfileStore
from .reconciler import ModStateReconciler, ReconcileReport

__all__ = ["ProfileStore", "ProfileSelection", "ModStateReconciler", "ReconcileReport"]
