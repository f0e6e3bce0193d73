from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass

from dbus_next import BusType
from dbus_next.aio import MessageBus
from dbus_next.errors import AuthError, DBusError, InvalidAddressError

from backlight_ctl.system.sysfs import Backlight, BacklightError

log = logging.getLogger(__name__)

LOGIN1 = "org.freedesktop.login1"
SESSION_OBJ = "/org/freedesktop/login1/session/auto"
SESSION_IFACE = "org.freedesktop.login1.Session"


async def set_brightness(subsystem: str, name: str, value: int) -> None:
    """Ask logind to write the brightness on behalf of the calling session."""

    bus = await MessageBus(bus_type=BusType.SYSTEM).connect()
    try:
        introspection = await bus.introspect(LOGIN1, SESSION_OBJ)
        obj = bus.get_proxy_object(LOGIN1, SESSION_OBJ, introspection)
        iface = obj.get_interface(SESSION_IFACE)
        await iface.call_set_brightness(subsystem, name, value)
    finally:
        bus.disconnect()


@dataclass(frozen=True)
class LogindBacklight(Backlight):
    """Backlight that reads sysfs but writes through systemd-logind.

    Lets an unprivileged user in an active session change brightness without
    write access to sysfs.
    """

    def set_brightness(self, value: int) -> None:
        log.debug("SetBrightness(backlight, %s, %d) via logind", self.name, value)
        try:
            asyncio.run(set_brightness("backlight", self.name, int(value)))
        except DBusError as e:
            raise BacklightError(f"logind refused brightness for {self.name}: {e.text}") from e
        except OSError as e:
            raise BacklightError(f"could not reach the system bus: {e.strerror or e}") from e
        except (InvalidAddressError, AuthError) as e:
            raise BacklightError(f"could not reach the system bus: {e}") from e
