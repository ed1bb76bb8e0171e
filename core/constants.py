# core/constants.py
USER_TYPE_CHOICES = (
    ('worker', 'Worker'),
    ('customer', 'Customer'),
)

AVAILABILITY_CHOICES = (
    ('available', 'Available'),
    ('busy', 'Busy'),
    ('offline', 'Offline'),
)

SERVICE_CATEGORY_CHOICES = (
    ('electrical', 'Electrical'),
    ('plumbing', 'Plumbing'),
    ('cleaning', 'Cleaning'),
    ('construction', 'Construction'),
    ('repair', 'Repair'),
    ('maintenance', 'Maintenance'),
    ('other', 'Other'),
)

JOB_STATUS_CHOICES = (
    ('open', 'Open'),                # Accepting applications
    ('assigned', 'Assigned'),        # Customer accepted one application
    ('in_progress', 'In Progress'),  # Work has started
    ('completed', 'Completed'),      # Work is done, reviews allowed
    ('cancelled', 'Cancelled'),      # Withdrawn by either party
)

JOB_APPLICATION_STATUS_CHOICES = (
    ('pending', 'Pending'),      # Worker applied, awaiting customer response
    ('accepted', 'Accepted'),    # Customer accepted worker's application
    ('rejected', 'Rejected'),    # Another application was accepted
)

BUDGET_TYPE_CHOICES = (
    ('hourly', 'Hourly'),
    ('fixed', 'Fixed'),
)

URGENCY_CHOICES = (
    ('low', 'Low'),
    ('medium', 'Medium'),
    ('high', 'High'),
    ('urgent', 'Urgent'),
)

# Status values a participant may request through the status endpoint,
# mapped to the workflow action they stand for.
STATUS_UPDATE_ACTIONS = {
    'in_progress': 'start',
    'completed': 'complete',
    'cancelled': 'cancel',
}

# (current status, action) -> (roles allowed, next status).
# "customer" is the job owner, "worker" the assigned worker.
JOB_TRANSITIONS = {
    ('open', 'accept'): ({'customer'}, 'assigned'),
    ('open', 'cancel'): ({'customer'}, 'cancelled'),
    ('assigned', 'start'): ({'customer', 'worker'}, 'in_progress'),
    ('assigned', 'cancel'): ({'customer', 'worker'}, 'cancelled'),
    ('in_progress', 'complete'): ({'customer', 'worker'}, 'completed'),
    ('in_progress', 'cancel'): ({'customer', 'worker'}, 'cancelled'),
}

REVIEW_ASPECTS = ('quality', 'punctuality', 'communication', 'professionalism')
