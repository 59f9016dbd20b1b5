from crispy_forms.helper import FormHelper
from crispy_forms.layout import Column, Layout, Row, Submit
from django import forms

from .catalogue import CATALOGUE
from .display import category_display


def _procedure_choices():
    choices = [("", "Jump to procedure…")]
    for category in CATALOGUE.categories():
        group = [(p.id, f"{p.id} – {p.short_title}") for p in CATALOGUE.get_by_category(category)]
        if group:
            choices.append((category_display(category).label, group))
    return choices


class ProcedureJumpForm(forms.Form):
    goto = forms.ChoiceField(choices=_procedure_choices, required=False, label="")
    # carried so a jump keeps the current disclosure state
    collapsed = forms.CharField(required=False, widget=forms.HiddenInput)
    open = forms.CharField(required=False, widget=forms.HiddenInput)
    closed = forms.CharField(required=False, widget=forms.HiddenInput)

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)

        self.helper = FormHelper()
        self.helper.form_method = "get"
        self.helper.form_show_labels = False
        self.helper.layout = Layout(
            "collapsed",
            "open",
            "closed",
            Row(
                Column("goto", css_class="col"),
                Column(Submit("jump", "Go", css_class="btn btn-outline-secondary btn-sm"), css_class="col-auto"),
                css_class="g-2 align-items-center",
            ),
        )

    def clean_goto(self):
        return self.cleaned_data.get("goto") or None
