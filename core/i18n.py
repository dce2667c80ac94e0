"""Shared DE/EN strings for the SnapCam UI."""

I18N = {
    "en": {
        "take_photo": "Take Photo",
        "edit": "Edit",
        "save": "Save",
        "share": "Share",
        "close": "Close",
        "edit_photo": "Edit Photo",
        "apply_filter": "Apply Filter",
        "add_text": "Add Text",
        "cancel": "Cancel",
        "select_filter": "Select Filter",
        "filter_none": "No Filter",
        "filter_sepia": "Sepia",
        "filter_mono": "Black & White",
        "add_text_prompt": "Enter the text to be added",
        "add": "Add",
        "shared": "Shared",
        "no_photo": "Tap Take Photo to start",
    },
    "de": {
        "take_photo": "Foto aufnehmen",
        "edit": "Bearbeiten",
        "save": "Sichern",
        "share": "Teilen",
        "close": "Schließen",
        "edit_photo": "Foto bearbeiten",
        "apply_filter": "Filter anwenden",
        "add_text": "Text hinzufügen",
        "cancel": "Abbrechen",
        "select_filter": "Filter wählen",
        "filter_none": "Kein Filter",
        "filter_sepia": "Sepia",
        "filter_mono": "Schwarzweiß",
        "add_text_prompt": "Text zum Einfügen eingeben",
        "add": "Hinzufügen",
        "shared": "Geteilt",
        "no_photo": "Tippe auf Foto aufnehmen",
    },
}
