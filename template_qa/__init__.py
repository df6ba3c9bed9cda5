"""
Template QA - validation and quality scoring for WhatsApp message templates.
"""

__version__ = "1.0.0"
