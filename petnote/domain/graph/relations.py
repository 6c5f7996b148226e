"""Ownership relations.

Each parent -> child relation is described by a ``Relation`` value: which
kinds it links, the field holding child ids on the parent and the field
holding the parent id on the child. The functions below read and rewrite
those fields without touching storage, returning new model instances.
"""

from dataclasses import dataclass

from petnote.domain.pet.models import Pet
from petnote.domain.shared import Err, InvariantViolation, Ok, Result
from petnote.domain.task.models import Task
from petnote.domain.types import Entity, EntityKind

from .models import Folder, Note, User

ENTITY_MODELS: dict[EntityKind, type[Entity]] = {
    EntityKind.USER: User,
    EntityKind.FOLDER: Folder,
    EntityKind.NOTE: Note,
    EntityKind.TASK: Task,
    EntityKind.PET: Pet,
}


@dataclass(frozen=True)
class Relation:
    """A one-to-many (or one-to-one when ``single``) ownership link.

    Attributes:
        parent: Kind of the owning entity.
        child: Kind of the owned entity.
        children_field: Field on the parent holding child ids
            (a list, or a single optional id when ``single``).
        parent_field: Field on the child holding the parent id.
        single: The parent owns at most one child of this kind.
    """

    parent: EntityKind
    child: EntityKind
    children_field: str
    parent_field: str
    single: bool = False

    def __str__(self) -> str:
        return f"{self.parent.value}->{self.child.value}"


USER_FOLDERS = Relation(EntityKind.USER, EntityKind.FOLDER, "folders", "user")
FOLDER_NOTES = Relation(EntityKind.FOLDER, EntityKind.NOTE, "notes", "folder")
NOTE_TASKS = Relation(EntityKind.NOTE, EntityKind.TASK, "tasks", "note")
USER_PET = Relation(EntityKind.USER, EntityKind.PET, "pet", "user", single=True)

RELATIONS = (USER_FOLDERS, FOLDER_NOTES, NOTE_TASKS, USER_PET)


def owning_relation(kind: EntityKind) -> Relation | None:
    """The relation through which entities of ``kind`` are owned.

    Returns None for users, which own but are not owned.
    """
    for relation in RELATIONS:
        if relation.child == kind:
            return relation
    return None


def child_relations(kind: EntityKind) -> tuple[Relation, ...]:
    """The list relations in which ``kind`` is the parent."""
    return tuple(r for r in RELATIONS if r.parent == kind and not r.single)


def child_ids(parent: Entity, relation: Relation) -> list[str]:
    """Child ids currently referenced by the parent."""
    value = getattr(parent, relation.children_field)
    if relation.single:
        return [] if value is None else [value]
    return list(value)


def has_child(parent: Entity, relation: Relation, child_id: str) -> bool:
    return child_id in child_ids(parent, relation)


def owner_id(child: Entity, relation: Relation) -> str:
    """Id of the parent the child points back to."""
    return getattr(child, relation.parent_field)


def with_child(
    parent: Entity,
    relation: Relation,
    child_id: str,
) -> Result[Entity, InvariantViolation]:
    """Return a copy of parent referencing child_id.

    A parent already referencing the child is returned unchanged. For a
    single-child relation, a slot holding a different id is an invariant
    violation.
    """
    if has_child(parent, relation, child_id):
        return Ok(parent)

    if relation.single:
        current = getattr(parent, relation.children_field)
        if current is not None:
            return Err(
                InvariantViolation(
                    f"{relation.parent.value.capitalize()} {parent.id} already has a "
                    f"{relation.child.value}: {current}"
                )
            )
        return Ok(parent.model_copy(update={relation.children_field: child_id}))

    children = [*child_ids(parent, relation), child_id]
    return Ok(parent.model_copy(update={relation.children_field: children}))


def without_child(parent: Entity, relation: Relation, child_id: str) -> Entity:
    """Return a copy of parent no longer referencing child_id.

    Removing an id that is not referenced returns the parent unchanged.
    """
    if not has_child(parent, relation, child_id):
        return parent

    if relation.single:
        return parent.model_copy(update={relation.children_field: None})

    children = [c for c in child_ids(parent, relation) if c != child_id]
    return parent.model_copy(update={relation.children_field: children})
