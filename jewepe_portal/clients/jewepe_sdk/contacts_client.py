from __future__ import annotations

from jewepe_portal.clients.jewepe_sdk.models import Contact
from jewepe_portal.clients.jewepe_sdk.resource_client import ResourceClient


class ContactsClient(ResourceClient[Contact]):
    collection_path = "/contacts"
    search_param = "q"
    model = Contact
