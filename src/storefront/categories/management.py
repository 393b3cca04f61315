"""Category management: commands and handler."""

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from storefront.catalogue.product import Product
from storefront.categories.category import Category
from storefront.domain import logger, storefront


@storefront.command(part_of="Category")
class CreateCategory:
    name = String(required=True, max_length=100)
    image_url = String(required=True, max_length=500)


@storefront.command(part_of="Category")
class DeleteCategory:
    category_id = Identifier(required=True)


@storefront.command(part_of="Category")
class AddProductToCategory:
    category_id = Identifier(required=True)
    product_id = Identifier(required=True)


@storefront.command_handler(part_of=Category)
class ManageCategoryHandler:
    @handle(CreateCategory)
    def create_category(self, command):
        repo = current_domain.repository_for(Category)
        if repo.find_by_name(command.name) is not None:
            raise ValidationError({"name": [f"Category '{command.name}' already exists"]})

        category = Category.create(name=command.name, image_url=command.image_url)
        repo.add(category)
        logger.info("Category created", category_id=str(category.id), name=category.name)
        return str(category.id)

    @handle(DeleteCategory)
    def delete_category(self, command):
        repo = current_domain.repository_for(Category)
        category = repo.get(command.category_id)
        repo.remove(category)
        logger.info("Category deleted", category_id=str(command.category_id))

    @handle(AddProductToCategory)
    def add_product_to_category(self, command):
        repo = current_domain.repository_for(Category)
        category = repo.get(command.category_id)
        current_domain.repository_for(Product).get(command.product_id)

        if category.add_product(command.product_id):
            repo.add(category)
