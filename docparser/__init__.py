"""SQL Accounting document-listing parser.

Reconstructs parent/item hierarchies embedded in spreadsheet exports
(Customer / Supplier / GL Document Listings) into flat tabular records.
"""

__version__ = "0.1.0"
