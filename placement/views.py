# placement/views.py
from __future__ import annotations

"""
Vues de l'application "placement".

Contenu :
- Sonde de santé (sante)
- Démarrage et polling d'une tâche Celery de génération (solve_start / solve_status)

La génération elle-même est une fonction pure (voir `solveurs.optimiseur`) ;
la tâche Celery se contente de traduire le payload et de garder le dernier
brouillon en cache.
"""

import json
from typing import Any, Dict

from django.http import HttpRequest, HttpResponse, HttpResponseBadRequest, JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_GET, require_POST


@require_GET
def sante(request: HttpRequest) -> HttpResponse:
    """
    Sonde de santé (sans DB/cache) : utile pour load balancer / monitoring.
    """
    return JsonResponse({"ok": True, "service": "placement", "version": 1})


# ---------------------------------------------------------------------------
# Celery : démarrage + polling
# ---------------------------------------------------------------------------

@csrf_exempt
@require_POST
def solve_start(request: HttpRequest) -> HttpResponse:
    """
    Lance la tâche Celery de génération :
    - Body : JSON de l'état (grid, students, restrictions, pins, draft, options)
    - Réponse : {"task_id": "..."} à poller via solve_status
    """
    from .tasks import t_generer_plan

    try:
        data: Dict[str, Any] = json.loads((request.body or b"{}").decode("utf-8"))
    except (json.JSONDecodeError, UnicodeDecodeError):
        return HttpResponseBadRequest("JSON invalide")
    if not isinstance(data, dict):
        return HttpResponseBadRequest("objet JSON attendu")

    task = t_generer_plan.delay(data)
    return JsonResponse({"task_id": task.id})


@require_GET
def solve_status(request: HttpRequest, task_id: str) -> HttpResponse:
    """
    Polling d'état (PENDING / STARTED / SUCCESS / FAILURE).
    En cas de SUCCESS, renvoie le résultat de la tâche (qui peut lui-même
    décrire un échec métier : places insuffisantes, épingles, restrictions).
    """
    from celery.result import AsyncResult

    ar = AsyncResult(task_id)
    if ar.state in ("PENDING", "RECEIVED", "STARTED", "RETRY"):
        return JsonResponse({"status": ar.state})
    if ar.state == "SUCCESS":
        return JsonResponse(ar.result)  # type: ignore[arg-type]

    return JsonResponse({"status": "FAILURE", "error": "erreur_interne", "message": str(ar.result) or "échec."})
