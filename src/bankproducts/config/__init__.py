"""
Configuration for the Bank Products Backend
"""
