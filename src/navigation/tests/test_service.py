import pytest

from navigation.exceptions import PlacementError
from navigation.models import FolderNode, QuestionnaireNode, TreeFolder
from navigation.service import get_folder_node, register_questionnaire
from questionnaires.models import Questionnaire

pytestmark = pytest.mark.django_db


def test_folder_node_is_created_once() -> None:
    """Test that the folder node is created on first lookup and reused afterwards."""
    folder = TreeFolder.objects.create(name="Review")

    first = get_folder_node("Review")
    second = get_folder_node("review")

    assert first == second
    assert first.tree_folder == folder
    assert FolderNode.objects.count() == 1


def test_missing_folder_is_a_placement_error() -> None:
    with pytest.raises(PlacementError):
        get_folder_node("Teammate Review")


def test_register_questionnaire_places_it_under_its_folder(
    questionnaire: Questionnaire, tree_folders: dict[str, TreeFolder]
) -> None:
    """Test that the questionnaire node hangs under the folder of the display category."""
    node = register_questionnaire(questionnaire)

    assert node.parent.tree_folder == tree_folders["Review"]
    assert questionnaire.node == node


def test_register_questionnaire_is_idempotent(
    questionnaire: Questionnaire, tree_folders: dict[str, TreeFolder]
) -> None:
    register_questionnaire(questionnaire)
    register_questionnaire(questionnaire)

    assert QuestionnaireNode.objects.filter(questionnaire=questionnaire).count() == 1
