"""
Entity-Component-System Core
=============================
Integer entity IDs with one component dictionary per component type.
"""

from typing import Dict, Set, Type, TypeVar, Optional, Iterator, Tuple, Any

from .errors import InvariantError


# Type variable for component types
C = TypeVar('C')


class World:
    """
    The entity store for one game session.

    Entities are integer IDs that are never reused, so a respawned target
    always gets a fresh ID. Destruction is deferred: destroyed entities
    disappear from queries at once but keep their components until
    process_dead_entities() runs at the end of the tick.
    """

    def __init__(self):
        self._next_entity_id: int = 0
        self._entities: Set[int] = set()
        self._components: Dict[Type, Dict[int, Any]] = {}
        self._dead_entities: Set[int] = set()

    def create_entity(self, *components: Any) -> int:
        """Create a new entity with the given components and return its ID."""
        entity_id = self._next_entity_id
        self._next_entity_id += 1
        self._entities.add(entity_id)
        for component in components:
            self.add_component(entity_id, component)
        return entity_id

    def destroy_entity(self, entity_id: int) -> None:
        """Mark an entity for destruction (processed at end of tick)."""
        if self.is_alive(entity_id):
            self._dead_entities.add(entity_id)

    def process_dead_entities(self) -> None:
        """Remove all entities marked for destruction."""
        for entity_id in self._dead_entities:
            self._entities.discard(entity_id)
            for component_store in self._components.values():
                component_store.pop(entity_id, None)
        self._dead_entities.clear()

    def add_component(self, entity_id: int, component: Any) -> None:
        """Add a component to an entity, replacing one of the same type."""
        self._components.setdefault(type(component), {})[entity_id] = component

    def get_component(self, entity_id: int, component_type: Type[C]) -> Optional[C]:
        """Get a component for an entity, or None if not found."""
        store = self._components.get(component_type)
        if store is None:
            return None
        return store.get(entity_id)

    def has_component(self, entity_id: int, component_type: Type) -> bool:
        """Check if an entity has a specific component."""
        return entity_id in self._components.get(component_type, ())

    def query(self, *component_types: Type) -> Iterator[Tuple[Any, ...]]:
        """
        Query for all live entities that have ALL specified component types.

        Yields tuples of (entity_id, component1, component2, ...) in
        creation order.
        """
        if not component_types:
            return

        stores = []
        for component_type in component_types:
            store = self._components.get(component_type)
            if not store:
                return
            stores.append(store)

        # Iterate the smallest store, check membership in the rest
        smallest = min(stores, key=len)
        for entity_id in sorted(smallest):
            if entity_id in self._dead_entities:
                continue
            if all(entity_id in store for store in stores):
                yield (entity_id,) + tuple(store[entity_id] for store in stores)

    def count(self, *component_types: Type) -> int:
        """Number of live entities carrying all the given components."""
        return sum(1 for _ in self.query(*component_types))

    def single(self, *component_types: Type) -> Tuple[Any, ...]:
        """
        Return the only live match for a query.

        Raises InvariantError when there are zero or several matches.
        """
        matches = list(self.query(*component_types))
        if len(matches) != 1:
            names = ', '.join(ct.__name__ for ct in component_types)
            raise InvariantError(
                f'expected exactly one entity with ({names}), found {len(matches)}'
            )
        return matches[0]

    def is_alive(self, entity_id: int) -> bool:
        """Check if an entity is alive (exists and not marked for death)."""
        return entity_id in self._entities and entity_id not in self._dead_entities
