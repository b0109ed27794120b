"""
User Service
Read-only queries over borrowers.
"""

from typing import List

from school_inventory.data.school_user import User


class UserService:

    @staticmethod
    def list_users() -> List[User]:
        return User.query.order_by(User.id).all()
