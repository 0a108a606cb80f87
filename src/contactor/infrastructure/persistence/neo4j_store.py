"""Neo4j implementation of ContactStore.
Graph: (owner:Container {id})-[:HAS]->(c:Contact), (owner)-[:HAS_GROUP]->(g:ContactGroup),
(c)-[:MEMBER_OF]->(g). Scalar fields are node properties; multi-valued fields,
addresses and the birthday are JSON strings; photos are byte arrays.
"""

import json
import uuid
from contextlib import contextmanager
from dataclasses import replace
from datetime import datetime, timezone

from neo4j.exceptions import AuthError, DriverError, Neo4jError

from contactor.application.errors import StoreError
from contactor.domain import (
    CONTACT_TYPE_PERSON,
    WILDCARD,
    ContactEntity,
    Group,
)
from contactor.infrastructure.serialization import (
    LABELED_FIELDS,
    entity_from_dict,
    entity_to_dict,
)
from contactor.infrastructure.vcard_export import export_vcards

SCALAR_FIELDS = (
    "contact_type",
    "name_prefix",
    "given_name",
    "middle_name",
    "family_name",
    "previous_family_name",
    "name_suffix",
    "nickname",
    "organization",
    "department",
    "job_title",
    "note",
)

_FIND_BY_NAME_QUERY = """
MATCH (:Container {id: $container_id})-[:HAS]->(c:Contact)
WHERE $match_all
   OR (size($words) > 0
       AND all(w IN $words WHERE any(t IN c.name_tokens WHERE t STARTS WITH w)))
RETURN c
ORDER BY c.created_at
"""

_FIND_BY_IDS_QUERY = """
MATCH (:Container {id: $container_id})-[:HAS]->(c:Contact)
WHERE c.id IN $ids
RETURN c
ORDER BY c.created_at
"""

_FIND_BY_GROUP_QUERY = """
MATCH (:Container {id: $container_id})-[:HAS]->(c:Contact)-[:MEMBER_OF]->(g:ContactGroup {id: $group_id})
RETURN c
ORDER BY c.created_at
"""

_LIST_GROUPS_QUERY = """
MATCH (:Container {id: $container_id})-[:HAS_GROUP]->(g:ContactGroup)
WHERE $ids IS NULL OR g.id IN $ids
RETURN g
ORDER BY g.created_at
"""

_SAVE_QUERY = """
MERGE (owner:Container {id: $container_id})
CREATE (owner)-[:HAS]->(c:Contact {id: $id, created_at: $created_at})
SET c += $props
WITH c
OPTIONAL MATCH (:Container {id: $container_id})-[:HAS_GROUP]->(g:ContactGroup {id: $group_id})
FOREACH (ignored IN CASE WHEN g IS NULL THEN [] ELSE [1] END | CREATE (c)-[:MEMBER_OF]->(g))
RETURN c.id AS id
"""

_UPDATE_QUERY = """
MATCH (:Container {id: $container_id})-[:HAS]->(c:Contact {id: $id})
SET c += $props
RETURN c.id AS id
"""

_DELETE_QUERY = """
MATCH (:Container {id: $container_id})-[:HAS]->(c:Contact {id: $id})
WITH c, c.id AS id
DETACH DELETE c
RETURN id
"""

_SAVE_GROUP_QUERY = """
MERGE (owner:Container {id: $container_id})
CREATE (owner)-[:HAS_GROUP]->(g:ContactGroup {id: $id, name: $name, created_at: $created_at})
RETURN g
"""

_DELETE_GROUP_QUERY = """
MATCH (:Container {id: $container_id})-[:HAS_GROUP]->(g:ContactGroup {id: $id})
WITH g, g.id AS id
DETACH DELETE g
RETURN id
"""


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def _entity_props(entity: ContactEntity) -> dict:
    data = entity_to_dict(entity)
    props = {name: data[name] for name in SCALAR_FIELDS}
    for name in LABELED_FIELDS:
        props[name] = json.dumps(data[name])
    props["postal_addresses"] = json.dumps(data["postal_addresses"])
    props["birthday"] = json.dumps(data["birthday"])
    props["image_data"] = entity.image_data
    props["thumbnail_image_data"] = entity.thumbnail_image_data
    props["image_data_available"] = entity.image_data_available
    props["name_tokens"] = [t.casefold() for t in entity.name_tokens()]
    return props


def _node_to_entity(node) -> ContactEntity:
    data = {name: node.get(name) or "" for name in SCALAR_FIELDS}
    data["contact_type"] = data["contact_type"] or CONTACT_TYPE_PERSON
    data["identifier"] = node["id"]
    for name in LABELED_FIELDS:
        data[name] = json.loads(node.get(name) or "[]")
    data["postal_addresses"] = json.loads(node.get("postal_addresses") or "[]")
    data["birthday"] = json.loads(node.get("birthday") or "null")
    entity = entity_from_dict(data)
    image = node.get("image_data")
    thumbnail = node.get("thumbnail_image_data")
    return replace(
        entity,
        image_data=bytes(image) if image else None,
        thumbnail_image_data=bytes(thumbnail) if thumbnail else None,
        image_data_available=bool(node.get("image_data_available")),
    )


def _node_to_group(node) -> Group:
    return Group(identifier=node["id"], name=node["name"])


@contextmanager
def _store_errors(action: str):
    try:
        yield
    except (Neo4jError, DriverError) as exc:
        raise StoreError(f"{action} failed: {exc}") from exc


class Neo4jContactStore:
    """Stores contacts and groups in Neo4j, scoped by container id."""

    def __init__(self, driver: object, container_id: str = "default") -> None:
        self._driver = driver
        self._container_id = container_id

    def request_access(self) -> bool:
        """Verify the driver can reach and authenticate against the database."""
        try:
            self._driver.verify_connectivity()
        except AuthError:
            return False
        except (Neo4jError, DriverError) as exc:
            raise StoreError(f"Neo4j is not reachable: {exc}") from exc
        return True

    def default_container_id(self) -> str | None:
        return self._container_id

    def close(self) -> None:
        self._driver.close()

    def find_by_name(self, pattern: str) -> list[ContactEntity]:
        return self._fetch_contacts(
            _FIND_BY_NAME_QUERY,
            "Name lookup",
            match_all=pattern.strip() == WILDCARD,
            words=pattern.casefold().split(),
        )

    def find_by_identifiers(self, identifiers: list[str]) -> list[ContactEntity]:
        return self._fetch_contacts(_FIND_BY_IDS_QUERY, "Identifier lookup", ids=identifiers)

    def find_by_group(self, group_id: str) -> list[ContactEntity]:
        return self._fetch_contacts(_FIND_BY_GROUP_QUERY, "Group lookup", group_id=group_id)

    def list_groups(self, identifiers: list[str] | None = None) -> list[Group]:
        with _store_errors("Listing groups"), self._driver.session() as session:
            result = session.run(
                _LIST_GROUPS_QUERY, container_id=self._container_id, ids=identifiers
            )
            return [_node_to_group(rec["g"]) for rec in result]

    def save(
        self,
        entity: ContactEntity,
        container_id: str | None = None,
        group_id: str | None = None,
    ) -> str:
        identifier = entity.identifier or str(uuid.uuid4())
        with _store_errors("Saving contact"), self._driver.session() as session:
            record = session.run(
                _SAVE_QUERY,
                container_id=container_id or self._container_id,
                id=identifier,
                created_at=_now_iso(),
                props=_entity_props(entity),
                group_id=group_id or "",
            ).single()
        if record is None:
            raise StoreError(f"Contact {identifier} was not stored.")
        return record["id"]

    def update(self, entity: ContactEntity) -> None:
        with _store_errors("Updating contact"), self._driver.session() as session:
            record = session.run(
                _UPDATE_QUERY,
                container_id=self._container_id,
                id=entity.identifier,
                props=_entity_props(entity),
            ).single()
        if record is None:
            raise StoreError(f"Contact {entity.identifier} does not exist.")

    def delete(self, entity: ContactEntity) -> None:
        self._delete(_DELETE_QUERY, "Contact", entity.identifier)

    def save_group(self, group: Group) -> Group:
        identifier = group.identifier or str(uuid.uuid4())
        with _store_errors("Saving group"), self._driver.session() as session:
            record = session.run(
                _SAVE_GROUP_QUERY,
                container_id=self._container_id,
                id=identifier,
                name=group.name,
                created_at=_now_iso(),
            ).single()
        if record is None:
            raise StoreError(f"Group {group.name!r} was not stored.")
        return _node_to_group(record["g"])

    def delete_group(self, group: Group) -> None:
        self._delete(_DELETE_GROUP_QUERY, "Group", group.identifier)

    def export_vcard(self, entities: list[ContactEntity]) -> bytes:
        return export_vcards(entities)

    def _fetch_contacts(self, query: str, action: str, **params) -> list[ContactEntity]:
        with _store_errors(action), self._driver.session() as session:
            result = session.run(query, container_id=self._container_id, **params)
            return [_node_to_entity(rec["c"]) for rec in result]

    def _delete(self, query: str, kind: str, identifier: str) -> None:
        with _store_errors(f"Deleting {kind.lower()}"), self._driver.session() as session:
            record = session.run(
                query, container_id=self._container_id, id=identifier
            ).single()
        if record is None:
            raise StoreError(f"{kind} {identifier} does not exist.")
