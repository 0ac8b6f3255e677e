"""
Per-resource read/write endpoints (users, articles, structure, partners,
contact info, site profile).
"""
