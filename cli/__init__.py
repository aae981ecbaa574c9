"""Command line interface helpers for Prompt Vault.

Updates: v0.1.0 - 2026-10-10 - Split parser, runtime, and command handlers out of main.
"""
