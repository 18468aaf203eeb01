"""Role permission helper sets."""

from asme.db.enums.auth import Role

# Roles that can create/edit/delete cases, hearings and their documents
ROLES_CAN_EDIT_CASES = {Role.ADMIN, Role.LAWYER, Role.ASSISTANT}

# Roles that can approve/reject/delete appointment requests
ROLES_CAN_MANAGE_APPOINTMENTS = {Role.ADMIN, Role.LAWYER, Role.ASSISTANT}

# Roles that can invite new staff users
ROLES_CAN_INVITE = {Role.ADMIN}

# Any dashboard role can read; users without a role see nothing
ROLES_CAN_VIEW_DASHBOARD = {Role.ADMIN, Role.LAWYER, Role.ASSISTANT, Role.VIEWER}

# Roles that manage marketing content, CRM clients, campaigns and PIPC files
ROLES_CAN_MANAGE_CONTENT = {Role.ADMIN, Role.LAWYER, Role.ASSISTANT}
