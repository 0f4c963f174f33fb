"""
Status web application.
"""
