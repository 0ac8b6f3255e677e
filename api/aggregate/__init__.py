"""
Resilient aggregate fetch: many independent reads, one composite payload.
"""
