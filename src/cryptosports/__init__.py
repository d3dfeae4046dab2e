"""Crypto Sports API: player token trading and staking."""
