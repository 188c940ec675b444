from django import forms

from .models import StatementRequest


class StatementRequestForm(forms.ModelForm):
    class Meta:
        model = StatementRequest
        fields = ['sender_name', 'sender_address', 'recipient_name', 'recipient_address', 'spreadsheet', 'logo']
        labels = {
            'sender_name': 'Company name',
            'sender_address': 'Company address',
            'recipient_name': 'Recipient company name',
            'recipient_address': 'Recipient company address',
            'spreadsheet': 'Excel file',
            'logo': 'Logo',
        }
        widgets = {
            'sender_name': forms.TextInput(attrs={'class': 'form-control', 'placeholder': 'Company name'}),
            'sender_address': forms.Textarea(attrs={'class': 'form-control', 'rows': 2}),
            'recipient_name': forms.TextInput(attrs={'class': 'form-control', 'placeholder': 'Recipient company name'}),
            'recipient_address': forms.Textarea(attrs={'class': 'form-control', 'rows': 2}),
            'spreadsheet': forms.ClearableFileInput(attrs={
                'accept': '.xlsx,.xlsm,application/vnd.openxmlformats-officedocument.spreadsheetml.sheet',
            }),
            'logo': forms.ClearableFileInput(attrs={'accept': 'image/png,image/jpeg'}),
        }
