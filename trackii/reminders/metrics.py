from prometheus_client import Counter


reminders_listed_total = Counter(
    "reminders_listed_total",
    "Total reminder list requests served",
)

reminder_occurrences_generated_total = Counter(
    "reminder_occurrences_generated_total",
    "Total dose occurrences generated before dismissal filtering",
)

reminders_dismissed_total = Counter(
    "reminders_dismissed_total",
    "Total reminder occurrences dismissed by users",
)

reminder_generation_failures_total = Counter(
    "reminder_generation_failures_total",
    "Prescriptions skipped because their schedule could not be generated",
)

reminder_dismissals_purged_total = Counter(
    "reminder_dismissals_purged_total",
    "Expired dismissals physically removed by the sweep task",
)
