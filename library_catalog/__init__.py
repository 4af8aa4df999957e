"""Library Catalog - Core Application Package

This package contains the core application modules including:
- Hash table index for the book catalog (hash_table.py)
- Merge sort used for every listing (sorting.py)
- Book, student and issued-entry records (book.py)
- Library management logic (library.py)
- Data file loading (loader.py)
- Menu commands (commands.py)
- CLI interface (main.py)
"""
