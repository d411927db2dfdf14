"""
Data files that ship with antdoc.
"""
