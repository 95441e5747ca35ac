from django.contrib import admin
from unfold.admin import ModelAdmin, TabularInline

from . import models


class AssignmentQuestionnaireInline(TabularInline):  # type: ignore[misc]
    model = models.AssignmentQuestionnaire
    extra = 0
    autocomplete_fields = ["questionnaire"]
    fields = ["questionnaire", "questionnaire_weight", "used_in_round"]


@admin.register(models.Assignment)
class AssignmentAdmin(ModelAdmin):  # type: ignore[misc]
    list_display = ["name", "instructor", "require_quiz", "num_quiz_questions", "created_at"]
    list_filter = ["require_quiz"]
    search_fields = ["name", "instructor__username"]
    inlines = [AssignmentQuestionnaireInline]
