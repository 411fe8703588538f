"""Test suite for the DWARF v1 function importer.

Test Structure:
- core/: Tests for .debug section parsing
- domain/: Tests for entry and program models, type resolution and importing
- infrastructure/: Tests for ELF loading, logging and diagnostics
- config/: Tests for configuration management
- utils/: Tests for utility functions

Run tests with pytest:
    pytest                    # Run all tests
    pytest -m unit            # Run unit tests only
"""
