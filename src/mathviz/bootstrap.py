"""Explicit, ordered startup registration of the built-in modules.

Modules do not register themselves on import. BUILTIN_MODULES lists
their registration functions in the order they are called, so the
catalog contents do not depend on import order and tests can register
any subset into a fresh catalog.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable

from mathviz.catalog import ModuleCatalog, RegistrationResult
from mathviz.config import AppConfig, get_config
from mathviz.session import AppContext
from mathviz.visualizations import dot_cross_product, roots_of_unity, slot_method

logger = logging.getLogger(__name__)

ModuleRegistration = Callable[[ModuleCatalog], RegistrationResult]

BUILTIN_MODULES: tuple[ModuleRegistration, ...] = (
    slot_method.register,
    dot_cross_product.register,
    roots_of_unity.register,
)


def register_builtin_modules(
    catalog: ModuleCatalog,
    registrations: Iterable[ModuleRegistration] = BUILTIN_MODULES,
) -> list[RegistrationResult]:
    """Call each registration function in order.

    A module that fails validation is left out and reported; the rest
    still register.

    Args:
        catalog: Catalog to register into
        registrations: Registration functions, called in the given order

    Returns:
        One RegistrationResult per registration function
    """
    results = [register(catalog) for register in registrations]
    failed = [r for r in results if not r.success]
    for result in failed:
        logger.warning("Module %s failed to register: %s", result.module_id, "; ".join(result.errors))
    logger.info("Registered %d modules (%d failed)", len(results) - len(failed), len(failed))
    return results


def create_context(
    config: AppConfig | None = None,
    registrations: Iterable[ModuleRegistration] = BUILTIN_MODULES,
    restore: bool = True,
) -> AppContext:
    """Build an AppContext, register modules and restore the saved position.

    Args:
        config: Optional config override. Uses default config if not provided.
        registrations: Registration functions to run
        restore: Whether to load the persisted navigation position

    Returns:
        Ready-to-use AppContext
    """
    cfg = config or get_config()
    context = AppContext.from_config(cfg)
    register_builtin_modules(context.catalog, registrations)
    if restore:
        context.restore_position()
    return context
