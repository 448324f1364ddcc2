"""
IR node model and S-expression tree loading.
"""
