"""
Pydantic models for bank products
"""
