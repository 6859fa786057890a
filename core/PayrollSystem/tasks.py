"""
Celery Tasks for the Payroll System
"""
import logging

from celery import shared_task

from .services import generate_monthly_salaries

logger = logging.getLogger(__name__)


@shared_task(name='generate_monthly_salaries_task')
def generate_monthly_salaries_task(month=None, year=None):
    """
    Create the month's PENDING salaries for all active employees.
    Scheduled by celery beat on the 1st of each month; month/year default
    to the current UTC month. Re-running is harmless, existing salaries are
    skipped.
    """
    logger.info(f"--- Running Monthly Salary Generation Task (month={month}, year={year}) ---")
    result = generate_monthly_salaries(month=month, year=year)
    summary = result['summary']
    logger.info(
        f"--- Monthly Salary Generation Task finished for {result['month']}/{result['year']}: "
        f"{summary['created']} created, {summary['skipped']} skipped, {summary['errors']} errors ---"
    )
    return result
