"""Example: drive the service layer directly (no Flask).

Controllers stay thin; the payroll rules live in the services.
"""

import asyncio
import importlib

from config import get_settings_module

from src.school_records.school_records.container import build_container
from src.school_records.school_records.core.enums import EntityKind, Role


async def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(settings)
    await container.store.initialize()

    teachers = [
        u for u in await container.store.collection(EntityKind.USERS).list() if u.get("role") == Role.TEACHER.value
    ]
    for salary in await container.payroll_service.list_salaries(current_role=Role.ADMIN):
        print(salary["teacherId"], salary["month"], salary["status"], salary["remainingBalance"])
    print(f"{len(teachers)} teachers")


if __name__ == "__main__":
    asyncio.run(main())
