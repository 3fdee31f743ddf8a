"""
Levanta Webhook Receiver

A small backend service that receives signed event notifications from the
Levanta affiliate platform, verifies their HMAC signature, and turns them
into human-readable notifications.
"""

__version__ = "1.0.0"
__author__ = "Levanta Webhook Team"
