"""Adapters for storage, the VRR upstream, the relay and the web surfaces."""
