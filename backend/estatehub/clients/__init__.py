"""
Outbound integrations
"""

from .email import BrevoEmailClient, EmailClient, LoggingEmailClient, build_email_client

__all__ = ['BrevoEmailClient', 'EmailClient', 'LoggingEmailClient', 'build_email_client']
