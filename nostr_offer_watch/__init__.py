"""
Nostr P2P Offer Watch

Polls Nostr relays for peer-to-peer exchange offers, filters them
against premium and side rules, and pushes a notification for every
new qualifying offer exactly once.
"""

__version__ = "0.1.0"
__author__ = "Nostr Offer Watch Team"
