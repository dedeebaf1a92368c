"""Clubman admin.

Transactions and outreach log entries are append-only: visible here,
never edited or added by hand.
"""

from django.contrib import admin
from django.urls import reverse
from django.utils.html import format_html

from clubman.models import Commerce, Customer, ReminderLog, Reward, Transaction
from clubman.protocols.records import ReminderStatus

_STATUS_COLORS = {
    ReminderStatus.OPENED: "orange",
    ReminderStatus.SENT: "green",
    ReminderStatus.SKIPPED: "gray",
}


class ReadOnlyAdminMixin:
    """Append-only records: no add, change or delete from the admin."""

    def has_add_permission(self, request, obj=None):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False


def _customer_link(customer):
    url = reverse("admin:clubman_customer_change", args=[customer.pk])
    return format_html('<a href="{}">{}</a>', url, customer.name)


# ===========================================
# Commerce Admin
# ===========================================


class RewardInline(admin.TabularInline):
    model = Reward
    extra = 0
    fields = ["name", "reward_type", "points_threshold", "stars_threshold", "active"]


@admin.register(Commerce)
class CommerceAdmin(admin.ModelAdmin):
    list_display = [
        "name",
        "plan_type",
        "program_badges",
        "scans_current_month",
        "monthly_scan_limit",
        "created_at",
    ]
    list_filter = ["plan_type", "enable_points", "enable_stars", "enable_coupon"]
    search_fields = ["name"]
    readonly_fields = ["id", "scans_current_month", "scans_reset_date", "created_at"]
    inlines = [RewardInline]

    fieldsets = [
        (None, {"fields": ["id", "name", "config_version"]}),
        ("Puntos", {"fields": ["enable_points", "points_mode", "points_value", "points_reward"]}),
        ("Estrellas", {"fields": ["enable_stars", "stars_goal", "stars_reward"]}),
        ("Cupón", {"fields": ["enable_coupon", "discount_percent", "discount_expiration_days"]}),
        (
            "Plan",
            {
                "fields": [
                    "plan_type",
                    "customer_limit",
                    "monthly_scan_limit",
                    "scans_current_month",
                    "scans_reset_date",
                ]
            },
        ),
        ("Timestamps", {"fields": ["created_at"], "classes": ["collapse"]}),
    ]

    def program_badges(self, obj):
        enabled = [
            label
            for label, on in (
                ("puntos", obj.enable_points),
                ("estrellas", obj.enable_stars),
                ("cupón", obj.enable_coupon),
            )
            if on
        ]
        return ", ".join(enabled) or "-"

    program_badges.short_description = "Programa"


# ===========================================
# Customer Admin
# ===========================================


@admin.register(Customer)
class CustomerAdmin(admin.ModelAdmin):
    list_display = [
        "name",
        "commerce",
        "phone",
        "qr_token",
        "total_points",
        "current_stars",
        "coupon_badge",
    ]
    list_filter = ["commerce", "discount_available"]
    search_fields = ["name", "phone", "email", "qr_token"]
    raw_id_fields = ["commerce"]
    readonly_fields = ["id", "qr_token", "created_at"]

    fieldsets = [
        (None, {"fields": ["id", "commerce", "name", "phone", "email", "qr_token"]}),
        ("Saldo", {"fields": ["total_points", "current_stars", "total_stars"]}),
        (
            "Cupón",
            {"fields": ["discount_available", "discount_expires_at", "last_discount_used_at"]},
        ),
        ("Timestamps", {"fields": ["created_at"], "classes": ["collapse"]}),
    ]

    def coupon_badge(self, obj):
        if obj.discount_available:
            return format_html('<span style="color: {};">{}</span>', "green", "V")
        return format_html('<span style="color: {};">{}</span>', "gray", "o")

    coupon_badge.short_description = "Cupón"


# ===========================================
# Reward Admin
# ===========================================


@admin.register(Reward)
class RewardAdmin(admin.ModelAdmin):
    list_display = ["name", "commerce", "reward_type", "points_threshold", "stars_threshold", "active"]
    list_filter = ["reward_type", "active"]
    search_fields = ["name", "commerce__name"]
    raw_id_fields = ["commerce"]
    list_editable = ["active"]


# ===========================================
# Transaction Admin (append-only)
# ===========================================


@admin.register(Transaction)
class TransactionAdmin(ReadOnlyAdminMixin, admin.ModelAdmin):
    list_display = [
        "created_at",
        "customer_link",
        "commerce",
        "amount",
        "points",
        "stars_gained",
        "redeemed_reward",
        "method",
    ]
    list_filter = ["method", "commerce"]
    search_fields = ["customer__name", "customer__qr_token", "staff_user_id"]
    date_hierarchy = "created_at"
    ordering = ["-created_at"]

    def customer_link(self, obj):
        return _customer_link(obj.customer)

    customer_link.short_description = "Cliente"


# ===========================================
# ReminderLog Admin (append-only)
# ===========================================


@admin.register(ReminderLog)
class ReminderLogAdmin(ReadOnlyAdminMixin, admin.ModelAdmin):
    list_display = ["created_at", "customer_link", "commerce", "reminder_type", "status_badge"]
    list_filter = ["reminder_type", "status", "commerce"]
    search_fields = ["customer__name", "message_text"]
    date_hierarchy = "created_at"
    ordering = ["-created_at"]

    def customer_link(self, obj):
        return _customer_link(obj.customer)

    customer_link.short_description = "Cliente"

    def status_badge(self, obj):
        color = _STATUS_COLORS.get(obj.status, "gray")
        return format_html('<span style="color: {};">{}</span>', color, obj.get_status_display())

    status_badge.short_description = "Estado"
