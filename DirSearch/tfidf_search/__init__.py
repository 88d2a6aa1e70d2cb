"""
TF-IDF search module scoring documents of a term frequency index against free-text queries.
"""
