"""
Concordance indexing and query package.

- analyzers: line normalization, tokenization and stop-word filtering
- windows: cyclic context-window construction
- sqlite_storage: the documents/lines/contexts schema
- query: predicate selection and the sort contract
"""
