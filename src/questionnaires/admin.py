from django.contrib import admin
from simple_history.admin import SimpleHistoryAdmin
from unfold.admin import ModelAdmin, StackedInline, TabularInline

from . import models


class QuestionInline(StackedInline):  # type: ignore[misc]
    model = models.Question
    extra = 0
    ordering = ["seq"]
    classes = ["collapse"]
    fieldsets = (
        (None, {"fields": (("seq", "question_type"), "txt", "weight")}),
        (
            "Display",
            {
                "fields": ("size", "alternatives", "break_before", ("min_label", "max_label")),
                "classes": ["collapse"],
            },
        ),
    )


class QuizQuestionChoiceInline(TabularInline):  # type: ignore[misc]
    model = models.QuizQuestionChoice
    extra = 0
    fields = ["txt", "is_correct"]


class QuestionAdviceInline(TabularInline):  # type: ignore[misc]
    model = models.QuestionAdvice
    extra = 0
    fields = ["score", "advice"]


@admin.register(models.Questionnaire)
class QuestionnaireAdmin(SimpleHistoryAdmin, ModelAdmin):  # type: ignore[misc]
    list_display = ["name", "questionnaire_type", "owner", "private", "min_question_score", "max_question_score"]
    list_filter = ["questionnaire_type", "private"]
    search_fields = ["name", "owner__username"]
    autocomplete_fields = ["owner"]
    readonly_fields = ["created_at", "updated_at"]
    inlines = [QuestionInline]
    fieldsets = (
        (None, {"fields": ("name", "questionnaire_type", "owner", "private")}),
        ("Scoring", {"fields": (("min_question_score", "max_question_score"),)}),
        ("Display", {"fields": ("display_type", "instruction_loc"), "classes": ["collapse"]}),
        ("Timestamps", {"fields": ("created_at", "updated_at"), "classes": ["collapse"]}),
    )


@admin.register(models.Question)
class QuestionAdmin(ModelAdmin):  # type: ignore[misc]
    list_display = ["__str__", "questionnaire", "question_type", "seq", "weight"]
    list_filter = ["question_type"]
    search_fields = ["txt", "questionnaire__name"]
    list_select_related = ["questionnaire"]
    autocomplete_fields = ["questionnaire"]
    inlines = [QuizQuestionChoiceInline, QuestionAdviceInline]


class AnswerInline(TabularInline):  # type: ignore[misc]
    model = models.Answer
    extra = 0
    fields = ["question", "answer", "comments"]
    autocomplete_fields = ["question"]


@admin.register(models.QuestionnaireResponse)
class QuestionnaireResponseAdmin(ModelAdmin):  # type: ignore[misc]
    list_display = ["questionnaire", "respondent", "assignment", "round", "submitted_at"]
    list_filter = ["round"]
    search_fields = ["questionnaire__name", "respondent__username"]
    list_select_related = ["questionnaire", "respondent", "assignment"]
    autocomplete_fields = ["questionnaire", "respondent", "assignment"]
    inlines = [AnswerInline]
