from django.urls import reverse_lazy

from .base import SITE_NAME

UNFOLD = {
    "SITE_TITLE": SITE_NAME,
    "SITE_HEADER": SITE_NAME,
    "SHOW_HISTORY": True,
    "SIDEBAR": {
        "show_search": True,
        "show_all_applications": False,
        "navigation": [
            {
                "title": "Questionnaires",
                "separator": True,
                "items": [
                    {
                        "title": "Questionnaires",
                        "icon": "quiz",
                        "link": reverse_lazy("admin:questionnaires_questionnaire_changelist"),
                    },
                    {
                        "title": "Responses",
                        "icon": "rate_review",
                        "link": reverse_lazy("admin:questionnaires_questionnaireresponse_changelist"),
                    },
                ],
            },
            {
                "title": "Courses",
                "separator": True,
                "items": [
                    {
                        "title": "Assignments",
                        "icon": "assignment",
                        "link": reverse_lazy("admin:assignments_assignment_changelist"),
                    },
                    {
                        "title": "Folders",
                        "icon": "folder",
                        "link": reverse_lazy("admin:navigation_treefolder_changelist"),
                    },
                    {
                        "title": "Users",
                        "icon": "person",
                        "link": reverse_lazy("admin:accounts_user_changelist"),
                    },
                ],
            },
        ],
    },
}
