from django.db import models

from common.models import TimeStampedModel


class TreeFolder(TimeStampedModel):
    """A named folder of the course/assignment hierarchy, e.g. "Review" or "Author Feedback"."""

    name = models.CharField(max_length=255, unique=True)
    parent = models.ForeignKey("self", on_delete=models.CASCADE, null=True, blank=True, related_name="children")

    class Meta:
        ordering = ["name"]

    def __str__(self) -> str:
        return self.name


class FolderNode(TimeStampedModel):
    tree_folder = models.OneToOneField(TreeFolder, on_delete=models.CASCADE, related_name="node")

    def __str__(self) -> str:
        return f"FolderNode<{self.tree_folder.name}>"


class QuestionnaireNode(TimeStampedModel):
    parent = models.ForeignKey(FolderNode, on_delete=models.CASCADE, related_name="questionnaire_nodes")
    questionnaire = models.OneToOneField(
        "questionnaires.Questionnaire", on_delete=models.CASCADE, related_name="node"
    )
