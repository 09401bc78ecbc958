"""Organization management console.

Feature packages (announcements, events, attendance, reports, users) each
split into model / repository / service / controller; the spreadsheet web
app behind ``gas`` is the only datastore.
"""
