"""
Well-known modules, operations, default roles and plans created by the seeder.
"""

# code -> (name, description)
MODULE_DEFINITIONS = {
    "Dashboard": ("Dashboard", "Dashboard and analytics"),
    "Vendor": ("Vendors", "Vendor management"),
    "Material": ("Materials", "Material management"),
    "PurchaseOrder": ("Purchase Orders", "Purchase order management"),
    "GRN": ("GRN", "Goods Receipt Note management"),
    "GRNFieldConfig": ("GRN Field Config", "GRN field configuration management"),
    "QC": ("Quality Control", "Quality control management"),
    "GatePass": ("Gate Pass", "Gate pass management"),
    "Report": ("Reports", "Reports and analytics"),
    "User": ("Users", "Tenant user management"),
    "Role": ("Roles", "Role management"),
    "Setting": ("Settings", "System settings"),
    "Transporter": ("Transporter", "Transporter master management"),
    "Tenant": ("Tenants", "Tenant management"),
    "Plan": ("Plans", "Plan management"),
    "Subscription": ("Subscriptions", "Subscription management"),
    "Notification": ("Notifications", "Notification management"),
    "Upload": ("Uploads", "File upload management"),
    "SuperAdmin": ("Super Admin", "Super admin management"),
    "ExternalDbConfig": ("External DB Config", "External database configuration management"),
}

STANDARD_OPERATIONS = ["Create", "Read", "Update", "Delete", "List"]

# Goods receipt workflow steps; there is no step 6
GRN_STEP_OPERATIONS = [
    "Step1GateEntry",
    "Step2InitialWeighing",
    "Step3Unloading",
    "Step4FinalWeighing",
    "Step5SupervisorReview",
    "Step7GatePass",
]

OPERATION_DEFINITIONS = {
    "Create": "Create",
    "Read": "Read",
    "Update": "Update",
    "Delete": "Delete",
    "List": "List",
    "Step1GateEntry": "Step 1 - Gate Entry",
    "Step2InitialWeighing": "Step 2 - Initial Weighing",
    "Step3Unloading": "Step 3 - Unloading",
    "Step4FinalWeighing": "Step 4 - Final Weighing",
    "Step5SupervisorReview": "Step 5 - Supervisor Review",
    "Step7GatePass": "Step 7 - Gate Pass",
}

# Modules whose permissions go beyond the standard operation set
EXTRA_MODULE_OPERATIONS = {
    "GRN": GRN_STEP_OPERATIONS,
}


def operations_for_module(module_code):
    """Operation codes a module gets permissions for."""
    return STANDARD_OPERATIONS + EXTRA_MODULE_OPERATIONS.get(module_code, [])


SUPER_ADMIN_ROLE = "Super Admin"
TENANT_ADMIN_ROLE = "Tenant Admin"

DEFAULT_ROLES = [
    (SUPER_ADMIN_ROLE, "Default super admin role with all permissions"),
    (TENANT_ADMIN_ROLE, "Default tenant administrator role with all permissions"),
]

_BASIC_MODULES = ["Dashboard", "Vendor", "Material", "PurchaseOrder"]
_STANDARD_MODULES = _BASIC_MODULES + ["GRN", "QC", "GatePass"]

DEFAULT_PLANS = [
    {
        "name": "Basic",
        "description": "Basic plan for small businesses",
        "price": "99.00",
        "billing_cycle": "monthly",
        "module_codes": _BASIC_MODULES,
    },
    {
        "name": "Standard",
        "description": "Standard plan for growing businesses",
        "price": "199.00",
        "billing_cycle": "monthly",
        "module_codes": _STANDARD_MODULES,
    },
    {
        "name": "Enterprise",
        "description": "Enterprise plan with all features",
        "price": "499.00",
        "billing_cycle": "monthly",
        "module_codes": list(MODULE_DEFINITIONS),
    },
]

# Codes used before the PascalCase convention
LEGACY_MODULE_CODES = {
    "DASHBOARD": "Dashboard",
    "VENDORS": "Vendor",
    "MATERIALS": "Material",
    "PURCHASE_ORDERS": "PurchaseOrder",
    "GATE_PASS": "GatePass",
    "REPORTS": "Report",
    "USERS": "User",
    "ROLES": "Role",
    "SETTINGS": "Setting",
    "TENANTS": "Tenant",
    "PLANS": "Plan",
    "SUBSCRIPTIONS": "Subscription",
}


def current_module_code(code):
    return LEGACY_MODULE_CODES.get(code, code)
