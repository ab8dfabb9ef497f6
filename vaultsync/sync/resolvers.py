# VaultSync Conflict Resolvers
# Non-interactive conflict resolution driven by a configured policy

from collections.abc import Callable
from typing import Union

from vaultsync.config.schema import ConflictPolicy
from vaultsync.sync.actions import ConflictChoice, SyncConflict

ConflictResolver = Callable[[SyncConflict], Union[ConflictChoice, str]]

_POLICY_CHOICES = {
    ConflictPolicy.LOCAL: ConflictChoice.LOCAL,
    ConflictPolicy.REMOTE: ConflictChoice.REMOTE,
    ConflictPolicy.SKIP: ConflictChoice.SKIP,
    # No one to ask outside an interactive session
    ConflictPolicy.ASK: ConflictChoice.SKIP,
}


def policy_resolver(policy: Union[ConflictPolicy, str]) -> ConflictResolver:
    """
    Build a resolver that answers every conflict the same way.

    Args:
        policy: Conflict policy; "ask" resolves to skip.

    Returns:
        Resolver callable.
    """
    choice = _POLICY_CHOICES[ConflictPolicy(policy)]

    def resolve(conflict: SyncConflict) -> ConflictChoice:
        return choice

    return resolve
