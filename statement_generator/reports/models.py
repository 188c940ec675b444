import os

from django.core.validators import FileExtensionValidator
from django.db import models

from .documents import StatementMetadata
from .utils import timestamped_name


def spreadsheet_upload_to(instance, filename):
    return f"statements/spreadsheets/{timestamped_name(os.path.splitext(filename)[1].lower())}"


def logo_upload_to(instance, filename):
    return f"statements/logos/{timestamped_name(os.path.splitext(filename)[1].lower())}"


class StatementRequest(models.Model):
    sender_name = models.CharField(max_length=255)
    sender_address = models.TextField()
    recipient_name = models.CharField(max_length=255)
    recipient_address = models.TextField()

    spreadsheet = models.FileField(
        upload_to=spreadsheet_upload_to,
        validators=[FileExtensionValidator(['xlsx', 'xlsm'])],
    )
    logo = models.FileField(
        upload_to=logo_upload_to,
        null=True,
        blank=True,
        validators=[FileExtensionValidator(['png', 'jpg', 'jpeg'])],
    )
    pdf_file = models.FileField(upload_to='statements/pdf/', null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['-created_at']
        get_latest_by = 'created_at'

    @property
    def metadata(self):
        return StatementMetadata(
            sender_name=self.sender_name or "",
            sender_address=self.sender_address or "",
            recipient_name=self.recipient_name or "",
            recipient_address=self.recipient_address or "",
        )

    def delete_files(self):
        for field in (self.spreadsheet, self.logo, self.pdf_file):
            if field:
                field.delete(save=False)

    def __str__(self):
        return f"Statement request #{self.id} for {self.recipient_name}"
