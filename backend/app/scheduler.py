"""
Planificateur APScheduler pour la réconciliation périodique des effectifs de classe.

Les effectifs sont déjà recalculés à chaque écriture d'élève ; ce job corrige
les dérives éventuelles (modifications directes en base, imports externes).
"""

import logging

from apscheduler.schedulers.background import BackgroundScheduler

from app.config import settings
from app.database import SessionLocal

logger = logging.getLogger(__name__)

scheduler = BackgroundScheduler()


def _resync_class_counts_scheduled() -> None:
    """
    Tâche planifiée : recalcule student_count pour toutes les classes.
    Import local pour éviter les imports circulaires.
    """
    from app.services.roster_service import sync_all_class_counts

    db = SessionLocal()
    try:
        total = sync_all_class_counts(db)
        logger.info("Réconciliation des effectifs : %d classes recalculées.", total)
    except Exception as exc:
        logger.error("Erreur lors de la réconciliation des effectifs : %s", exc)
    finally:
        db.close()


def start_scheduler() -> None:
    """Démarre le planificateur en arrière-plan (appelé au démarrage de l'API)."""
    if not settings.SCHEDULER_ENABLED:
        logger.info("Scheduler désactivé (SCHEDULER_ENABLED=false).")
        return
    scheduler.add_job(
        _resync_class_counts_scheduled,
        trigger="interval",
        hours=settings.ROSTER_SYNC_INTERVAL_HOURS,
        id="class_student_count_resync",
        replace_existing=True,
    )
    scheduler.start()
    logger.info(
        "Scheduler démarré — réconciliation des effectifs toutes les %d h.",
        settings.ROSTER_SYNC_INTERVAL_HOURS,
    )


def stop_scheduler() -> None:
    """Arrête le planificateur proprement (appelé à l'arrêt de l'API)."""
    if scheduler.running:
        scheduler.shutdown(wait=False)
        logger.info("Scheduler arrêté.")
