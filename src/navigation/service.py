"""Placement of questionnaires in the navigation tree."""

import typing as t

import structlog

from .exceptions import PlacementError
from .models import FolderNode, QuestionnaireNode, TreeFolder

if t.TYPE_CHECKING:
    from questionnaires.models import Questionnaire

logger = structlog.get_logger(__name__)


def get_folder_node(display_type: str) -> FolderNode:
    """Find the folder node for a display category, creating the node for an existing folder if needed."""
    tree_folder = TreeFolder.objects.filter(name__iexact=display_type).first()
    if tree_folder is None:
        raise PlacementError(f"There is no folder for questionnaires of type '{display_type}'.")
    folder_node, _ = FolderNode.objects.get_or_create(tree_folder=tree_folder)
    return folder_node


def register_questionnaire(questionnaire: "Questionnaire") -> QuestionnaireNode:
    """Attach the questionnaire under the folder node of its display category."""
    parent = get_folder_node(questionnaire.display_type)
    node, created = QuestionnaireNode.objects.get_or_create(questionnaire=questionnaire, defaults={"parent": parent})
    if created:
        logger.info(
            "questionnaire_node_created",
            questionnaire_id=questionnaire.pk,
            folder=parent.tree_folder.name,
        )
    return node
