"""
Preprocessing module for text processing in DirSearch.
Includes tokenization, lowercase conversion and text extraction from document files.
"""
