from .user_model import Base, Role, User

__all__ = ["Base", "Role", "User"]
