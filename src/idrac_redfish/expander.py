from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from .models import ComputerSystemCollection

if TYPE_CHECKING:
    from .client import Client

logger = structlog.get_logger(__name__)


def expand_computer_systems(collection: ComputerSystemCollection, client: Client) -> None:
    """Resolve every member of ``collection`` into a ComputerSystem.

    Members are fetched one at a time in list order. An already expanded
    collection is left untouched. The first failing member aborts the
    expansion and nothing is stored on the collection.
    """
    if collection.computer_systems:
        return
    computer_systems = []
    for member in collection.members:
        computer_systems.append(client.get_computer_system_by_resource_id(member.id + "/"))
    logger.debug("expanded collection", collection=collection.odata.id, members=len(computer_systems))
    collection.computer_systems = computer_systems
