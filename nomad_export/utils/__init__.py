"""Utility modules for nomad-export.

This package provides shared utilities used across the nomad-export codebase:

- cli: Error handling decorator for CLI commands
- logging_utils: Logging configuration for the CLI
- output: Console output, JSON serialization and writing
"""
