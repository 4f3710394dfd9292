from rewards.profiles.service import ProfileService

__all__ = ["ProfileService"]
