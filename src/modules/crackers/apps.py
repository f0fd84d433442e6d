from django.apps import AppConfig


class CrackersConfig(AppConfig):
    name = "modules.crackers"
    label = "crackers"
    verbose_name = "Crackers catalog"
