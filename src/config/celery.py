"""
Configuração do Celery para o Bloomora Order Management.

A única task é a entrega de notificações ao Telegram.  As settings do
Django (prefixo CELERY_) são lidas de forma preguiçosa; por isso
DJANGO_SETTINGS_MODULE precisa estar definido antes da app.
"""

import os

from celery import Celery

os.environ.setdefault("DJANGO_SETTINGS_MODULE", "config.settings")

app = Celery("bloomora")

app.config_from_object("django.conf:settings", namespace="CELERY")

# Com o broker fora do ar, .delay() falha rápido.
app.conf.task_publish_retry = False
app.conf.broker_connection_timeout = 3

app.autodiscover_tasks()
