"""Product catalog commands."""

import base64

import click
from invoicepulse.cli.error_handling import handle_domain_error
from invoicepulse.cli.formatting import format_money
from invoicepulse.domain.errors import ConflictError, DomainError, duplicate_product
from invoicepulse.domain.product import ProductService
from invoicepulse.domain.settings import SettingsService
from invoicepulse.domain.validation import validate_product
from invoicepulse.utils.amount_parser import parse_amount
from invoicepulse.utils.resolvers import resolve_product


def _parse_optional_amount(ctx, value: str | None, label: str) -> float | None:
    if value is None:
        return None
    try:
        return parse_amount(value)
    except ValueError as e:
        click.echo(f"Error: Invalid {label}: {e}", err=True)
        ctx.exit(1)


def _read_image(image_path: str | None) -> str | None:
    """Read an image file as base64 text for storage."""
    if image_path is None:
        return None
    with open(image_path, "rb") as fh:
        return base64.b64encode(fh.read()).decode("ascii")


@click.group()
def product_group():
    """Manage the product catalog."""
    pass


@product_group.command("add")
@click.argument("name", metavar="PRODUCT_NAME")
@click.option("--category", required=True, help="Product category")
@click.option("--sub-category", "sub_categories", multiple=True, help="Sub-category label (repeatable)")
@click.option("--description", default="", help="Product description")
@click.option("--price", required=True, help="Default unit price")
@click.option("--discount", help="Default discount percentage (e.g., 10 for 10%)")
@click.option("--image", "image_path", type=click.Path(exists=True, dir_okay=False), help="Image file")
@click.pass_context
def add_product(
    ctx,
    name: str,
    category: str,
    sub_categories: tuple[str, ...],
    description: str,
    price: str,
    discount: str | None,
    image_path: str | None,
):
    """Add a product to the catalog.

    A product with the same name and category (ignoring case and surrounding
    spaces) is refused.

    Examples:
        invoicepulse product add "Widget" --category Goods --price 10
        invoicepulse product add "Cable" --category Hardware --sub-category USB-C --price 8.50 --discount 5
    """
    service = ProductService(ctx.obj["db"])
    default_price = _parse_optional_amount(ctx, price, "price")
    default_discount = _parse_optional_amount(ctx, discount, "discount")

    try:
        validate_product(name, category, default_price, default_discount)
        if service.find_duplicate(name, category) is not None:
            raise ConflictError(duplicate_product(name, category))
    except DomainError as e:
        handle_domain_error(ctx, e)

    product = service.create_product(
        name=name.strip(),
        category=category.strip(),
        sub_categories=sub_categories,
        description=description,
        default_price=default_price,
        default_discount=default_discount,
        image=_read_image(image_path),
    )
    click.echo(f"Created product '{product.name}' in '{product.category}' (ID: {product.id})")


@product_group.command("list")
@click.option("--category", help="Only show products in this category")
@click.pass_context
def list_products(ctx, category: str | None):
    """List catalog products."""
    db = ctx.obj["db"]
    service = ProductService(db)
    currency = SettingsService(db).get_settings().currency

    products = service.list_products(category=category)
    if not products:
        click.echo("No products found.")
        return

    click.echo("\nProducts:")
    click.echo("-" * 72)
    for p in products:
        tags = f" [{', '.join(p.sub_categories)}]" if p.sub_categories else ""
        discount = f" (-{p.default_discount:g}%)" if p.default_discount else ""
        click.echo(
            f"ID: {p.id} | {p.name + tags:28s} | {p.category:14s} | "
            f"{format_money(p.default_price, currency)}{discount}"
        )


@product_group.command("update")
@click.argument("product", metavar="PRODUCT")
@click.option("--match-category", help="Category of the product, when the name exists in several")
@click.option("--name", help="New product name")
@click.option("--category", help="New category")
@click.option("--sub-category", "sub_categories", multiple=True, help="Replace sub-categories (repeatable)")
@click.option("--description", help="New description")
@click.option("--price", help="New default unit price")
@click.option("--discount", help="New default discount percentage")
@click.option("--clear-discount", is_flag=True, help="Remove the default discount")
@click.option("--image", "image_path", type=click.Path(exists=True, dir_okay=False), help="New image file")
@click.option("--clear-image", is_flag=True, help="Remove the image")
@click.pass_context
def update_product(
    ctx,
    product: str,
    match_category: str | None,
    name: str | None,
    category: str | None,
    sub_categories: tuple[str, ...],
    description: str | None,
    price: str | None,
    discount: str | None,
    clear_discount: bool,
    image_path: str | None,
    clear_image: bool,
):
    """Update a catalog product.

    PRODUCT can be a product name or ID. Only the given fields change.
    """
    service = ProductService(ctx.obj["db"])
    default_price = _parse_optional_amount(ctx, price, "price")
    default_discount = _parse_optional_amount(ctx, discount, "discount")

    try:
        current = resolve_product(service, product, category=match_category)
        new_name = name if name is not None else current.name
        new_category = category if category is not None else current.category
        validate_product(
            new_name,
            new_category,
            default_price if default_price is not None else current.default_price,
            default_discount,
        )
        if service.find_duplicate(new_name, new_category, exclude_id=current.id) is not None:
            raise ConflictError(duplicate_product(new_name, new_category))
        updated = service.update_product(
            current.id,
            name=name.strip() if name is not None else None,
            category=category.strip() if category is not None else None,
            sub_categories=sub_categories or None,
            description=description,
            default_price=default_price,
            default_discount=default_discount,
            image=_read_image(image_path),
            clear_discount=clear_discount,
            clear_image=clear_image,
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Updated product '{updated.name}'")


@product_group.command("delete")
@click.argument("product", metavar="PRODUCT")
@click.option("--category", help="Category of the product, when the name exists in several")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_product(ctx, product: str, category: str | None, yes: bool):
    """Delete a catalog product.

    PRODUCT can be a product name or ID. Existing invoice lines are not affected.
    """
    service = ProductService(ctx.obj["db"])

    try:
        product_obj = resolve_product(service, product, category=category)
    except DomainError as e:
        handle_domain_error(ctx, e)

    if not yes and not click.confirm(f"Are you sure you want to delete product '{product_obj.name}'?"):
        click.echo("Deletion cancelled.")
        return

    service.delete_product(product_obj.id)
    click.echo(f"Deleted product '{product_obj.name}'")


@product_group.command("consolidate")
@click.pass_context
def consolidate_catalog(ctx):
    """Merge catalog products that share a name and category.

    The first entry is kept. It takes the latest price, the longest
    description, an image if it has none, and the latest non-zero discount.
    """
    service = ProductService(ctx.obj["db"])

    removed = service.consolidate_catalog()
    if removed == 0:
        click.echo("No duplicate products found.")
        return
    click.echo(f"Merged {removed} duplicate product{'s' if removed != 1 else ''}.")


def register_commands(cli):
    """Register product commands with main CLI."""
    cli.add_command(product_group, name="product")
