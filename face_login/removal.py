# coding: utf-8

"""
Removal

Deletes an enrolled person from the identity group. Deleting a person that no
longer exists succeeds silently.
"""

from .base import BaseOrchestrator
from .errors import RemovalError
from .provider import is_not_found


class RemovalOrchestrator(BaseOrchestrator):
    """Removal Orchestrator"""

    def remove(self, person_id: str):
        """
        Remove a previously enrolled person

        Raises:
            RemovalError: on any provider error other than not-found
        """
        with self.indicator.track():
            try:
                self.provider.delete_person(self.group_id, person_id)
            except Exception as e:
                if is_not_found(e):
                    self.logger.info(f"Person {person_id} does not exist in group {self.group_id}")
                    return
                self.logger.error(f"Error deleting person {person_id}: {e}")
                raise RemovalError(str(e), person_id) from e
