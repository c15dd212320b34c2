"""
User Directory

Owns the customer list. Phone numbers are unique across users; names are
matched case-insensitively when deleting.
"""

from restaurant_api.core.exceptions import ConflictError, NotFoundError
from restaurant_api.models import User
from restaurant_api.services.base import BaseStore


class UserDirectory(BaseStore[User]):
    """Collection of users."""

    entity_name = "user"

    def get(self, user_id: int) -> User:
        user = self.lookup(user_id)
        if user is None:
            raise NotFoundError(self.entity_name, user_id)
        return user

    def find_by_phone(self, phone: int) -> User:
        """
        Get the user owning a phone number.

        Raises:
            NotFoundError: If no user has this phone
        """
        for user in self._records.values():
            if user.phone == phone:
                return user
        raise NotFoundError(self.entity_name, phone)

    def add(self, name: str, phone: int) -> User:
        """
        Register a new user.

        Raises:
            ConflictError: If the phone already belongs to a user; nothing
                is created in that case
        """
        if any(user.phone == phone for user in self._records.values()):
            raise ConflictError("phone", phone)

        user_id = self._next_id()
        return self._insert(user_id, User(id=user_id, name=name, phone=phone))

    def remove_by_name(self, name: str) -> User:
        """
        Delete the first user whose name matches, ignoring case.

        Orders placed by that user keep their now-dangling ``user_id``.

        Raises:
            NotFoundError: If no user has this name
        """
        wanted = name.casefold()
        for user_id, user in self._records.items():
            if user.name.casefold() == wanted:
                return self._delete(user_id)
        raise NotFoundError(self.entity_name, name)
