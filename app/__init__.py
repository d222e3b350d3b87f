"""CRM event dispatch and reminder scheduling service."""
