"""Icy Isaac Mod Manager."""

APP_NAME = "Icy Isaac Mod Manager"
APP_VERSION = "0.3.0"
