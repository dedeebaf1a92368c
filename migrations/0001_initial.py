# Generated migration for Clubman core tables

import uuid

import django.db.models.deletion
import django.utils.timezone
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Commerce",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("name", models.CharField(max_length=200, verbose_name="nombre")),
                ("enable_points", models.BooleanField(default=False, verbose_name="puntos habilitados")),
                ("enable_stars", models.BooleanField(default=False, verbose_name="estrellas habilitadas")),
                ("enable_coupon", models.BooleanField(default=False, verbose_name="cupón habilitado")),
                (
                    "points_mode",
                    models.CharField(
                        choices=[("PERCENTAGE", "Porcentaje del monto"), ("FIXED", "Fijo por compra")],
                        default="PERCENTAGE",
                        max_length=20,
                        verbose_name="modo de puntos",
                    ),
                ),
                (
                    "points_value",
                    models.DecimalField(
                        decimal_places=2,
                        default=0,
                        help_text="Porcentaje del monto o puntos fijos por compra",
                        max_digits=10,
                        verbose_name="valor de puntos",
                    ),
                ),
                ("stars_goal", models.PositiveIntegerField(default=5, verbose_name="meta de estrellas")),
                (
                    "discount_percent",
                    models.DecimalField(decimal_places=2, default=0, max_digits=5, verbose_name="descuento (%)"),
                ),
                (
                    "discount_expiration_days",
                    models.PositiveIntegerField(default=30, verbose_name="vigencia del cupón (días)"),
                ),
                ("config_version", models.PositiveIntegerField(default=1, verbose_name="versión de configuración")),
                (
                    "plan_type",
                    models.CharField(
                        choices=[("FREE", "Gratis"), ("PRO", "Pro")],
                        default="FREE",
                        max_length=10,
                        verbose_name="plan",
                    ),
                ),
                (
                    "customer_limit",
                    models.PositiveIntegerField(default=100, help_text="0 = sin límite", verbose_name="límite de clientes"),
                ),
                (
                    "monthly_scan_limit",
                    models.PositiveIntegerField(default=100, verbose_name="límite mensual de escaneos"),
                ),
                ("scans_current_month", models.PositiveIntegerField(default=0, verbose_name="escaneos del mes")),
                (
                    "scans_reset_date",
                    models.DateTimeField(
                        blank=True,
                        default=django.utils.timezone.now,
                        null=True,
                        verbose_name="último reinicio de escaneos",
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="creado en")),
            ],
            options={
                "verbose_name": "comercio",
                "verbose_name_plural": "comercios",
                "ordering": ["name"],
            },
        ),
        migrations.CreateModel(
            name="Reward",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("name", models.CharField(max_length=200, verbose_name="nombre")),
                ("description", models.TextField(blank=True, verbose_name="descripción")),
                (
                    "reward_type",
                    models.CharField(
                        choices=[("POINTS", "Puntos"), ("STARS", "Estrellas")],
                        max_length=10,
                        verbose_name="tipo",
                    ),
                ),
                (
                    "points_threshold",
                    models.PositiveIntegerField(blank=True, null=True, verbose_name="puntos necesarios"),
                ),
                (
                    "stars_threshold",
                    models.PositiveIntegerField(blank=True, null=True, verbose_name="estrellas necesarias"),
                ),
                ("active", models.BooleanField(default=True, verbose_name="activo")),
                (
                    "commerce",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="rewards",
                        to="clubman.commerce",
                        verbose_name="comercio",
                    ),
                ),
            ],
            options={
                "verbose_name": "premio",
                "verbose_name_plural": "premios",
            },
        ),
        migrations.AddField(
            model_name="commerce",
            name="points_reward",
            field=models.ForeignKey(
                blank=True,
                null=True,
                on_delete=django.db.models.deletion.SET_NULL,
                related_name="+",
                to="clubman.reward",
                verbose_name="premio de puntos",
            ),
        ),
        migrations.AddField(
            model_name="commerce",
            name="stars_reward",
            field=models.ForeignKey(
                blank=True,
                null=True,
                on_delete=django.db.models.deletion.SET_NULL,
                related_name="+",
                to="clubman.reward",
                verbose_name="premio de estrellas",
            ),
        ),
        migrations.CreateModel(
            name="Customer",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("name", models.CharField(max_length=200, verbose_name="nombre")),
                ("phone", models.CharField(blank=True, db_index=True, max_length=20, verbose_name="teléfono")),
                ("email", models.EmailField(blank=True, max_length=254, verbose_name="email")),
                ("qr_token", models.CharField(max_length=40, unique=True, verbose_name="token QR")),
                ("total_points", models.IntegerField(default=0, verbose_name="puntos")),
                ("current_stars", models.PositiveIntegerField(default=0, verbose_name="estrellas actuales")),
                (
                    "total_stars",
                    models.PositiveIntegerField(
                        default=0,
                        help_text="Total histórico (nunca decrece)",
                        verbose_name="estrellas acumuladas",
                    ),
                ),
                ("discount_available", models.BooleanField(default=False, verbose_name="cupón disponible")),
                ("discount_expires_at", models.DateTimeField(blank=True, null=True, verbose_name="cupón vence")),
                (
                    "last_discount_used_at",
                    models.DateTimeField(blank=True, null=True, verbose_name="último cupón usado"),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True, db_index=True, verbose_name="creado en")),
                (
                    "commerce",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="customers",
                        to="clubman.commerce",
                        verbose_name="comercio",
                    ),
                ),
            ],
            options={
                "verbose_name": "cliente",
                "verbose_name_plural": "clientes",
                "ordering": ["name"],
                "indexes": [models.Index(fields=["commerce", "phone"], name="clubman_cus_commerc_6f3a1e_idx")],
            },
        ),
        migrations.CreateModel(
            name="Transaction",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("staff_user_id", models.CharField(blank=True, max_length=100, verbose_name="usuario")),
                ("amount", models.DecimalField(decimal_places=2, max_digits=12, verbose_name="monto")),
                ("points", models.IntegerField(default=0, verbose_name="puntos otorgados")),
                ("stars_gained", models.PositiveIntegerField(blank=True, null=True, verbose_name="estrellas")),
                ("coupon_generated", models.BooleanField(blank=True, null=True, verbose_name="cupón generado")),
                (
                    "discount_applied",
                    models.DecimalField(
                        blank=True,
                        decimal_places=2,
                        max_digits=5,
                        null=True,
                        verbose_name="descuento aplicado (%)",
                    ),
                ),
                (
                    "method",
                    models.CharField(
                        choices=[("SCAN", "Escaneo QR"), ("MANUAL", "Manual")],
                        default="SCAN",
                        max_length=10,
                        verbose_name="método",
                    ),
                ),
                (
                    "points_mode_used",
                    models.CharField(
                        blank=True,
                        choices=[("PERCENTAGE", "Porcentaje del monto"), ("FIXED", "Fijo por compra")],
                        max_length=20,
                        null=True,
                        verbose_name="modo de puntos usado",
                    ),
                ),
                (
                    "points_value_used",
                    models.DecimalField(
                        blank=True,
                        decimal_places=2,
                        max_digits=10,
                        null=True,
                        verbose_name="valor de puntos usado",
                    ),
                ),
                (
                    "config_version_used",
                    models.PositiveIntegerField(blank=True, null=True, verbose_name="versión usada"),
                ),
                ("created_at", models.DateTimeField(db_index=True, verbose_name="creado en")),
                (
                    "commerce",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="transactions",
                        to="clubman.commerce",
                        verbose_name="comercio",
                    ),
                ),
                (
                    "customer",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="transactions",
                        to="clubman.customer",
                        verbose_name="cliente",
                    ),
                ),
                (
                    "redeemed_reward",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="redemptions",
                        to="clubman.reward",
                        verbose_name="premio canjeado",
                    ),
                ),
            ],
            options={
                "verbose_name": "transacción",
                "verbose_name_plural": "transacciones",
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(fields=["customer", "-created_at"], name="clubman_tra_custome_2b8c4d_idx"),
                    models.Index(fields=["commerce", "-created_at"], name="clubman_tra_commerc_9d1e7a_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="ReminderLog",
            fields=[
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                (
                    "reminder_type",
                    models.CharField(
                        choices=[
                            ("inactive", "Inactivo"),
                            ("near_reward", "Cerca del premio"),
                            ("coupon_expiring", "Cupón por vencer"),
                        ],
                        max_length=20,
                        verbose_name="tipo",
                    ),
                ),
                ("message_text", models.TextField(blank=True, verbose_name="mensaje")),
                (
                    "status",
                    models.CharField(
                        choices=[("opened", "Abierto"), ("sent", "Enviado"), ("skipped", "Omitido")],
                        db_index=True,
                        default="opened",
                        max_length=10,
                        verbose_name="estado",
                    ),
                ),
                ("staff_user_id", models.CharField(blank=True, max_length=100, verbose_name="usuario")),
                ("created_at", models.DateTimeField(db_index=True, verbose_name="creado en")),
                (
                    "commerce",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="reminder_logs",
                        to="clubman.commerce",
                        verbose_name="comercio",
                    ),
                ),
                (
                    "customer",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="reminder_logs",
                        to="clubman.customer",
                        verbose_name="cliente",
                    ),
                ),
            ],
            options={
                "verbose_name": "recordatorio de WhatsApp",
                "verbose_name_plural": "recordatorios de WhatsApp",
                "db_table": "clubman_whatsapp_reminder_log",
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(
                        fields=["commerce", "customer", "-created_at"],
                        name="clubman_wha_commerc_4c2f8b_idx",
                    ),
                ],
            },
        ),
    ]
