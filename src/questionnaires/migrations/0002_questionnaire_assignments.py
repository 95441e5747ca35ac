from django.db import migrations, models


class Migration(migrations.Migration):
    dependencies = [
        ("assignments", "0002_assignmentquestionnaire"),
        ("questionnaires", "0001_initial"),
    ]

    operations = [
        migrations.AddField(
            model_name="questionnaire",
            name="assignments",
            field=models.ManyToManyField(
                blank=True,
                related_name="questionnaires",
                through="assignments.AssignmentQuestionnaire",
                to="assignments.assignment",
            ),
        ),
    ]
