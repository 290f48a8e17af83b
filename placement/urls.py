from django.urls import path
from . import views

app_name = "placement"

urlpatterns = [
    # Petite sonde de santé (pratique pour Nginx / monitoring)
    path("sante", views.sante, name="sante"),

    # Génération asynchrone : démarrage puis polling
    path("solve/start", views.solve_start, name="pl_solve_start"),
    path("solve/status/<str:task_id>", views.solve_status, name="pl_solve_status"),
]
