"""
Core domain models, money math, and data contracts.

This module contains the foundational building blocks that are independent
of the command line, documents, and the file system.
"""
