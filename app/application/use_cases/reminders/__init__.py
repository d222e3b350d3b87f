"""Reminder rule use cases."""

from app.application.use_cases.reminders.reminder_operations import ReminderRuleService

__all__ = ["ReminderRuleService"]
