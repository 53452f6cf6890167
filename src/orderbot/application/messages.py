"""Conversation texts and keyboards.

Every user-visible string lives here. Texts are HTML (Telegram flavour);
anything typed by a user or read from the catalog is escaped.
"""

from __future__ import annotations

from html import escape

from orderbot.application.dto import InlineButton, OrderDTO, OutboundMessage
from orderbot.domain.model.delivery import DeliveryPolicy
from orderbot.domain.model.order import Order
from orderbot.domain.model.product import Product
from orderbot.domain.model.session import Session
from orderbot.domain.model.value_objects import Quantity
from orderbot.domain.service.cart_pricing_service import CartQuote

# --- Button labels ------------------------------------------------------------

BROWSE_LABEL = "🧱 Voir les produits"
VIEW_CART_LABEL = "🛒 Voir mon panier"
CHECKOUT_LABEL = "📦 Passer commande"
SUPPORT_LABEL = "📞 Contact / Support"
ADD_PRODUCT_LABEL = "➕ Ajouter produit"
CLEAR_CART_LABEL = "🗑️ Vider panier"
BACK_LABEL = "↩️ Retour"
CONFIRM_LABEL = "✅ Confirmer"
CANCEL_LABEL = "❌ Annuler"

MAIN_MENU = (
    (BROWSE_LABEL, VIEW_CART_LABEL),
    (CHECKOUT_LABEL, SUPPORT_LABEL),
)
CART_MENU = (
    (ADD_PRODUCT_LABEL, CLEAR_CART_LABEL),
    (CHECKOUT_LABEL, BACK_LABEL),
)
CONFIRM_MENU = ((CONFIRM_LABEL,), (CANCEL_LABEL,))

STATUS_HINT = "EN_COURS|LIVRÉ|ANNULÉ"
PRODUCT_PAYLOAD_PREFIX = "p_"


def product_payload(product_id: int) -> str:
    """Inline button payload selecting a product, e.g. ``p_5``."""
    return f"{PRODUCT_PAYLOAD_PREFIX}{product_id}"


def _line(name: str, quantity: Quantity, unit: str, unit_price, subtotal) -> str:
    return f"- {escape(name)}: {quantity} {escape(unit)} x {unit_price} = {subtotal}"


def _text(text: str, **kwargs) -> OutboundMessage:
    return OutboundMessage(text=text, html=True, **kwargs)


# --- Customer conversation ----------------------------------------------------


def welcome(first_name: str) -> OutboundMessage:
    name = escape(first_name or "Client")
    return _text(
        f"Bonjour {name} 👷‍♂️\nBienvenue sur <b>Matériaux Mada Bot</b>.\n\n"
        "Choisissez une option:",
        keyboard=MAIN_MENU,
    )


def main_menu() -> OutboundMessage:
    return _text("Choisissez une option:", keyboard=MAIN_MENU)


def catalog(products: list[Product], adding: bool = False) -> OutboundMessage:
    if not products:
        return _text("Aucun produit trouvé. L'admin doit ajouter des produits via la base.")
    title = "Choisis un produit à ajouter :" if adding else "Nos produits :"
    buttons = tuple(
        InlineButton(label=p.label, payload=product_payload(p.id)) for p in products
    )
    return _text(title, buttons=buttons)


def product_prompt(product: Product) -> OutboundMessage:
    stock = "∞" if product.stock is None else str(product.stock)
    description = escape(product.description or "-")
    return _text(
        f"Produit: <b>{escape(product.name)}</b> — {product.price} / {escape(product.unit)}\n"
        f"Description: {description}\n"
        f"Stock: {stock}\n\n"
        "Indique la quantité que tu veux (ex: 10 pour 10 unités / 0.5 pour 0.5 m3) :"
    )


def product_not_found() -> OutboundMessage:
    return _text("Produit introuvable.")


def invalid_quantity() -> OutboundMessage:
    return _text("Quantité invalide. Envoie un nombre (ex: 10 ou 0.5).")


def added_to_cart(product: Product, quantity: Quantity) -> OutboundMessage:
    return _text(
        f"{escape(product.name)} x {quantity} ajouté au panier.",
        keyboard=MAIN_MENU,
    )


def cart_empty() -> OutboundMessage:
    return _text("Ton panier est vide.")


def cart_view(quote: CartQuote) -> OutboundMessage:
    rows = [
        _line(pl.product.name, pl.quantity, pl.product.unit, pl.unit_price, pl.subtotal)
        for pl in quote.lines
    ]
    return _text(
        "<b>Ton panier:</b>\n" + "\n".join(rows) + f"\n\n<b>Total:</b> {quote.items_total}",
        keyboard=CART_MENU,
    )


def cart_cleared() -> OutboundMessage:
    return _text("Panier vidé.", keyboard=MAIN_MENU)


def products_removed() -> OutboundMessage:
    return _text(
        "Un ou plusieurs produits ne sont plus disponibles et ont été retirés de ton panier."
    )


def finish_checkout_first() -> OutboundMessage:
    return _text(
        "Une commande est en cours. Termine-la ou annule-la avant de modifier ton panier."
    )


def delivery_prompt(policy: DeliveryPolicy) -> OutboundMessage:
    rows = tuple((label,) for label in policy.labels) + ((CANCEL_LABEL,),)
    return _text("Choisis le type de livraison :", keyboard=rows)


def delivery_mismatch(policy: DeliveryPolicy) -> OutboundMessage:
    rows = tuple((label,) for label in policy.labels) + ((CANCEL_LABEL,),)
    return _text(
        "Option de livraison inconnue. Choisis Standard ou Express :", keyboard=rows
    )


def address_prompt() -> OutboundMessage:
    return _text(
        "Envoie ton adresse de livraison complète (quartier, rue, point de repère) :"
    )


def phone_prompt() -> OutboundMessage:
    return _text("Indique ton numéro de téléphone (ex: 034...) :")


def empty_reply() -> OutboundMessage:
    return _text("Réponse vide. Merci de réessayer.")


def order_summary(session: Session, quote: CartQuote) -> OutboundMessage:
    rows = [
        _line(pl.product.name, pl.quantity, pl.product.unit, pl.unit_price, pl.subtotal)
        for pl in quote.lines
    ]
    delivery = session.delivery_type.value if session.delivery_type else "-"
    return _text(
        "<b>Récapitulatif de commande:</b>\n"
        + "\n".join(rows)
        + f"\n\nLivraison: {delivery}"
        + f"\nAdresse: {escape(session.address or '')}"
        + f"\nTéléphone: {escape(session.phone or '')}"
        + f"\n<b>Total à payer:</b> {quote.total}\n\nConfirmer la commande ?",
        keyboard=CONFIRM_MENU,
    )


def price_changed() -> OutboundMessage:
    return _text("Les prix ont changé depuis le récapitulatif. Vérifie le nouveau total :")


def order_received(order: Order) -> OutboundMessage:
    return _text(
        f"✅ Ta commande #{order.id} a été reçue. "
        "Nous te contacterons pour confirmer la livraison.",
        remove_keyboard=True,
    )


def order_cancelled() -> OutboundMessage:
    return _text("Commande annulée et panier vidé.", remove_keyboard=True)


def confirm_or_cancel() -> OutboundMessage:
    return _text("Confirme ou annule ta commande :", keyboard=CONFIRM_MENU)


def nothing_to_confirm() -> OutboundMessage:
    return _text("Aucune commande à confirmer.")


def generic_failure() -> OutboundMessage:
    return _text("Une erreur est survenue. Réessaie dans un instant.")


def support(contact: str) -> OutboundMessage:
    return _text(escape(contact))


# --- Operator -----------------------------------------------------------------


def new_order(order: Order, customer_display: str) -> OutboundMessage:
    rows = [
        _line(i.product_name, i.quantity, i.unit, i.unit_price, i.line_total)
        for i in order.items
    ]
    return _text(
        f"📥 <b>Nouvelle commande</b> #{order.id}\n"
        f"Client: {escape(customer_display)}\n"
        f"Tel: {escape(order.phone)}\n"
        f"Adresse: {escape(order.address)}\n"
        f"Livraison: {order.delivery_type.value}\n"
        f"Total: {order.total}\n\nItems:\n" + "\n".join(rows)
    )


def status_changed(order: Order) -> OutboundMessage:
    return _text(f"Votre commande #{order.id} est maintenant: {escape(order.status)}")


def no_orders() -> OutboundMessage:
    return _text("Aucune commande.")


def order_not_found() -> OutboundMessage:
    return _text("Commande introuvable.")


def orders_list(orders: list[OrderDTO]) -> OutboundMessage:
    rows = [
        f"#{o.id} — {escape(o.status)} — {o.total} — {o.created_at}" for o in orders
    ]
    return _text("<b>Commandes récentes:</b>\n" + "\n".join(rows))


def order_detail(order: OrderDTO) -> OutboundMessage:
    rows = [
        f"- {escape(i.product_name)}: {i.quantity} {escape(i.unit)} x {i.unit_price} = {i.line_total}"
        for i in order.items
    ]
    return _text(
        f"<b>Commande #{order.id}</b>\n"
        f"Status: {escape(order.status)}\n"
        f"Livraison: {order.delivery_type}\n"
        f"Total: {order.total}\n"
        f"Adresse: {escape(order.address)}\n"
        f"Tel: {escape(order.phone)}\n"
        "Items:\n" + "\n".join(rows)
        + f"\n\nUtilise /set_status {order.id} STATUS ({STATUS_HINT})"
    )


def status_updated(order: Order) -> OutboundMessage:
    return _text(f"Commande #{order.id} mise à jour: {escape(order.status)}")
