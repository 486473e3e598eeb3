"""
URL configuration for the weather widget.

Every path resolves to the widget page; there is no other routing.
"""

# Routes:
# - <any path> -> weather.views.widget_page

from django.urls import re_path

from weather.views import widget_page

urlpatterns = [
    re_path(r"^.*$", widget_page, name="widget-page"),
]
