"""Invite links for referral attribution.

Each link carries a 6-character code and expires 30 days after creation.
"""

from rewards.invites.models import InviteLink, Invitee
from rewards.invites.service import InviteService, generate_invite_code

__all__ = ["InviteLink", "InviteService", "Invitee", "generate_invite_code"]
