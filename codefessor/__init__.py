"""
Codefessor backend: code-understanding interviews and authorship analysis.
"""
