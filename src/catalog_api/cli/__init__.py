"""
Operational CLI (catalogctl).
"""
