from django.conf import settings
from django.db import models


class TrackerState(models.Model):
    """Selected seller, cart and last bill ids saved for one user."""

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        primary_key=True,
        related_name='tracker_state'
    )
    data = models.JSONField(default=dict, blank=True)

    # Timestamps
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'tracker_states'

    def __str__(self):
        return f"Tracker state for {self.user}"
