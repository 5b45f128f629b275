"""
buildflow Test Suite

This package contains all tests for the build orchestrator:
- unit/: Tests for individual steps and primitives in isolation
- integration/: Tests for composed pipelines and the CLI
"""
