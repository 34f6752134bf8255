from django.apps import AppConfig

class CocktailsConfig(AppConfig):
    """Django app config for cocktails; loads signal handlers and system checks on ready."""
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'cocktails'

    def ready(self):
        """Import signal and check modules to register them."""
        import cocktails.signals
        import cocktails.checks
