"""Typed REST client for the Pocket Writer backend."""

from pocketwriter.client.api import PocketWriterClient

__all__ = ["PocketWriterClient"]
