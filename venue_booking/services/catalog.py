"""Static venue catalog.

Reference tables for everything a reservation can select: beverages,
entremeses, per-guest add-ons, food services, rooms, event types, buffet
menus, table shapes and additional services. Lookups never raise; unknown
ids come back as ``None`` so stale selections price at zero.
"""

from decimal import Decimal
from typing import Optional

from venue_booking.models.catalog import (
    CatalogItem,
    CatalogKind,
    EventRoom,
    FoodService,
    PerGuestItem,
)

BEVERAGE_ITEMS: tuple[CatalogItem, ...] = (
    # Non-alcoholic
    CatalogItem(id="soft-drinks", display_name="Caja de Refrescos (24)", unit_price=Decimal("35")),
    CatalogItem(id="water", display_name="Caja de Agua (24)", unit_price=Decimal("20")),
    # Beers
    CatalogItem(id="michelob", display_name="Michelob", unit_price=Decimal("72"), is_alcoholic=True),
    CatalogItem(id="medalla", display_name="Medalla", unit_price=Decimal("72"), is_alcoholic=True),
    CatalogItem(id="heineken", display_name="Heineken", unit_price=Decimal("72"), is_alcoholic=True),
    CatalogItem(id="coors", display_name="Coors Light", unit_price=Decimal("72"), is_alcoholic=True),
    CatalogItem(id="corona", display_name="Corona", unit_price=Decimal("72"), is_alcoholic=True),
    CatalogItem(id="modelo", display_name="Modelo", unit_price=Decimal("72"), is_alcoholic=True),
    # Liquors
    CatalogItem(id="black-label-1l", display_name="1 Litro Black Label", unit_price=Decimal("65"), is_alcoholic=True),
    CatalogItem(id="tito-1l", display_name="1 Litro Tito Vodka", unit_price=Decimal("45"), is_alcoholic=True),
    CatalogItem(id="dewars-12-handle", display_name="Gancho Dewars 12", unit_price=Decimal("200"), is_alcoholic=True),
    CatalogItem(id="dewars-handle", display_name="Gancho Dewars Reg.", unit_price=Decimal("150"), is_alcoholic=True),
    CatalogItem(id="donq-cristal-handle", display_name="Gancho Don Q Cristal", unit_price=Decimal("75"), is_alcoholic=True),
    CatalogItem(id="donq-limon-handle", display_name="Gancho Don Q Limón", unit_price=Decimal("75"), is_alcoholic=True),
    CatalogItem(id="donq-passion-handle", display_name="Gancho Don Q Passion", unit_price=Decimal("75"), is_alcoholic=True),
    CatalogItem(id="donq-coco-handle", display_name="Gancho Don Q Coco", unit_price=Decimal("75"), is_alcoholic=True),
    CatalogItem(id="donq-naranja-handle", display_name="Gancho Don Q Naranja", unit_price=Decimal("75"), is_alcoholic=True),
    CatalogItem(id="donq-oro-handle", display_name="Gancho Don Q Oro", unit_price=Decimal("75"), is_alcoholic=True),
    CatalogItem(id="tito-handle", display_name="Gancho Tito Vodka", unit_price=Decimal("150"), is_alcoholic=True),
    CatalogItem(id="sangria", display_name="Jarra de Sangria", unit_price=Decimal("25"), is_alcoholic=True),
    # Wines
    CatalogItem(id="red-wine-25", display_name="Botella de Vino Tinto ($25)", unit_price=Decimal("25"), is_alcoholic=True),
    CatalogItem(id="red-wine-30", display_name="Botella de Vino Tinto ($30)", unit_price=Decimal("30"), is_alcoholic=True),
    CatalogItem(id="red-wine-35-1", display_name="Botella de Vino Tinto ($35)", unit_price=Decimal("35"), is_alcoholic=True),
    CatalogItem(id="red-wine-35-2", display_name="Botella de Vino Tinto ($35)", unit_price=Decimal("35"), is_alcoholic=True),
    CatalogItem(id="red-wine-40", display_name="Botella de Vino Tinto ($40)", unit_price=Decimal("40"), is_alcoholic=True),
    CatalogItem(id="white-wine-25", display_name="Botella de Vino Blanco ($25)", unit_price=Decimal("25"), is_alcoholic=True),
    CatalogItem(id="white-wine-30", display_name="Botella de Vino Blanco ($30)", unit_price=Decimal("30"), is_alcoholic=True),
    CatalogItem(id="white-wine-35-1", display_name="Botella de Vino Blanco ($35)", unit_price=Decimal("35"), is_alcoholic=True),
    CatalogItem(id="white-wine-35-2", display_name="Botella de Vino Blanco ($35)", unit_price=Decimal("35"), is_alcoholic=True),
    CatalogItem(id="white-wine-40", display_name="Botella de Vino Blanco ($40)", unit_price=Decimal("40"), is_alcoholic=True),
    # Corkage
    CatalogItem(id="descorche", display_name="Descorche", unit_price=Decimal("0")),
)

ENTREMESES_ITEMS: tuple[CatalogItem, ...] = (
    CatalogItem(id="bandeja-surtido", display_name="Bandeja de Surtido", unit_price=Decimal("100")),
    CatalogItem(id="media-bandeja", display_name="Media Bandeja de Surtidos", unit_price=Decimal("50")),
    CatalogItem(id="bandeja-cortes-frios", display_name="Bandeja Cortes Frios", unit_price=Decimal("150")),
    CatalogItem(id="platos-entremeses", display_name="Platos de Entremeses", unit_price=Decimal("20")),
)

PER_GUEST_ITEMS: dict[CatalogKind, tuple[PerGuestItem, ...]] = {
    CatalogKind.BEVERAGE: (
        PerGuestItem(id="mimosa", display_name="Mimosa", rate=Decimal("3.95")),
    ),
    CatalogKind.ENTREMESES: (
        PerGuestItem(id="asopao", display_name="Asopao", rate=Decimal("3.00")),
        PerGuestItem(id="ceviche", display_name="Ceviche", rate=Decimal("3.95")),
    ),
}

# Per-guest prices for the food options are venue defaults
FOOD_SERVICES: tuple[FoodService, ...] = (
    FoodService(id="individual-plates", display_name="Platos Individuales", unit_price=Decimal("25.00")),
    FoodService(id="cocktail-reception", display_name="Recepción de Cóctel", unit_price=Decimal("18.00")),
    FoodService(id="desayuno-9.95", display_name="Desayuno $9.95", unit_price=Decimal("9.95")),
    FoodService(id="desayuno-10.95", display_name="Desayuno $10.95", unit_price=Decimal("10.95")),
    FoodService(id="buffet-22.95", display_name="Buffet", unit_price=Decimal("22.95")),
    FoodService(id="buffet-26.95", display_name="Buffet", unit_price=Decimal("26.95")),
    FoodService(id="no-food", display_name="Sin Servicio de Comida", unit_price=Decimal("0"), serves_food=False),
)

EVENT_ROOMS: tuple[EventRoom, ...] = (
    EventRoom(id="grand-hall", display_name="Salon 1", hourly_rate=Decimal("150")),
    EventRoom(id="intimate-room", display_name="Salon 2", hourly_rate=Decimal("100")),
    EventRoom(id="outdoor-terrace", display_name="Salon 3", hourly_rate=Decimal("125")),
)

OTHER_EVENT_TYPE = "other"

EVENT_TYPES: dict[str, str] = {
    "wedding": "Boda",
    "birthdays": "Cumpleaños",
    "pharmaceutical": "Farmacéutica",
    "baptism": "Bautizo",
    "graduation": "Graduación",
    "fiesta-navidad": "Fiesta de Navidad",
    OTHER_EVENT_TYPE: "Otro",
}

BUFFET_MENU: dict[str, dict[str, str]] = {
    "rice": {
        "cebolla": "Arroz Cebolla",
        "cilantro": "Arroz Cilantro",
        "mamposteado": "Arroz Mamposteado",
        "consomme": "Arroz Consommé",
        "griego": "Arroz Griego",
        "gandules": "Arroz con Gandules",
    },
    "protein": {
        "pechuga-cilantro": "Pechuga salsa Cilantro",
        "pechuga-tres-quesos": "Pechuga tres quesos",
        "pechuga-ajillo": "Pechuga Ajillo",
        "pavo-cranberry": "Filete Pavo Frito salsa cranberry",
        "medallones-guayaba": "Medallones salsa Guayaba",
        "pernil-asado": "Pernil Asado",
        "pescado-ajillo": "Filete de Pescado Ajillo",
        "churrasco-setas": "Churrasco salsa setas",
    },
    "side": {
        "papas-leonesa": "Papas Leonesa",
        "papas-salteadas": "Papas salteadas",
        "ensalada-papa": "Ensalada Papa",
        "ensalada-coditos": "Ensalada de coditos",
    },
    "salad": {
        "caesar": "Ensalada César",
        "verde": "Ensalada Verde",
        "papa": "Ensalada de Papa",
        "coditos": "Ensalada de Coditos",
    },
}

BUFFET_EXTRAS: dict[str, str] = {
    "bread": "Panecillos",
    "water_soda": "Agua y Refresco",
}

TABLE_SHAPES: dict[str, str] = {
    "round": "Mesa Redonda",
    "rectangular": "Mesa Rectangular",
}

SERVICE_NAMES: dict[str, str] = {
    "audio_visual": "Manteles",
    "decorations": "Basic Decorations",
    "waitstaff": "Additional Waitstaff",
    "valet": "Valet Parking",
}


class Catalog:
    """Read-only lookup over the venue reference tables."""

    def __init__(
        self,
        beverages: tuple[CatalogItem, ...] = BEVERAGE_ITEMS,
        entremeses: tuple[CatalogItem, ...] = ENTREMESES_ITEMS,
        per_guest_items: Optional[dict[CatalogKind, tuple[PerGuestItem, ...]]] = None,
        food_services: tuple[FoodService, ...] = FOOD_SERVICES,
        rooms: tuple[EventRoom, ...] = EVENT_ROOMS,
    ):
        self._items = {
            CatalogKind.BEVERAGE: beverages,
            CatalogKind.ENTREMESES: entremeses,
        }
        self._index = {
            kind: {item.id: item for item in items}
            for kind, items in self._items.items()
        }
        per_guest = per_guest_items if per_guest_items is not None else PER_GUEST_ITEMS
        self._per_guest = {
            kind: {item.id: item for item in per_guest.get(kind, ())}
            for kind in CatalogKind
        }
        self._food_services = {service.id: service for service in food_services}
        self._rooms = {room.id: room for room in rooms}

    def items(self, kind: CatalogKind) -> tuple[CatalogItem, ...]:
        """Items of one family in their fixed order."""
        return self._items[kind]

    def find(self, kind: CatalogKind, item_id: str) -> Optional[CatalogItem]:
        """Look up a unit-priced item."""
        return self._index[kind].get(item_id)

    def per_guest_items(self, kind: CatalogKind) -> tuple[PerGuestItem, ...]:
        """Per-guest add-ons of one family."""
        return tuple(self._per_guest[kind].values())

    def find_per_guest(self, kind: CatalogKind, item_id: str) -> Optional[PerGuestItem]:
        """Look up a per-guest add-on."""
        return self._per_guest[kind].get(item_id)

    def food_services(self) -> tuple[FoodService, ...]:
        return tuple(self._food_services.values())

    def food_service(self, food_type: str) -> Optional[FoodService]:
        return self._food_services.get(food_type)

    def rooms(self) -> tuple[EventRoom, ...]:
        return tuple(self._rooms.values())

    def room(self, room_type: str) -> Optional[EventRoom]:
        return self._rooms.get(room_type)

    def room_name(self, room_type: str) -> str:
        room = self.room(room_type)
        return room.display_name if room else room_type

    def food_name(self, food_type: str) -> str:
        service = self.food_service(food_type)
        if service:
            return service.display_name
        return "Buffet" if food_type.startswith("buffet") else food_type

    def item_name(self, kind: CatalogKind, item_id: str) -> str:
        """Display name of a unit or per-guest item, falling back to the id."""
        item = self.find(kind, item_id) or self.find_per_guest(kind, item_id)
        return item.display_name if item else item_id

    @staticmethod
    def event_type_name(event_type: str) -> str:
        return EVENT_TYPES.get(event_type, event_type)

    @staticmethod
    def is_standard_event_type(event_type: str) -> bool:
        return event_type in EVENT_TYPES and event_type != OTHER_EVENT_TYPE

    @staticmethod
    def buffet_item_name(category: str, key: str) -> str:
        """Display name of a buffet pick; protein1/protein2 share one menu."""
        menu = BUFFET_MENU.get("protein" if category.startswith("protein") else category, {})
        return menu.get(key, key)

    @staticmethod
    def service_name(service: str) -> str:
        return SERVICE_NAMES.get(service, service)

    @staticmethod
    def table_shape_name(shape: str) -> str:
        return TABLE_SHAPES.get(shape, shape)
