from django.contrib import admin
from unfold.admin import ModelAdmin

from . import models


@admin.register(models.TreeFolder)
class TreeFolderAdmin(ModelAdmin):  # type: ignore[misc]
    list_display = ["name", "parent"]
    search_fields = ["name"]


@admin.register(models.QuestionnaireNode)
class QuestionnaireNodeAdmin(ModelAdmin):  # type: ignore[misc]
    list_display = ["questionnaire", "parent", "created_at"]
    list_select_related = ["questionnaire", "parent__tree_folder"]
