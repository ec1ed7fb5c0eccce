import random
import uuid
from decimal import Decimal

import factory
from django.contrib.auth import get_user_model
from faker import Faker

from catalog.models import Product, ProductImage

User = get_user_model()
fake = Faker()


class UserFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = User

    username = factory.Sequence(lambda n: f"user_{n}")
    email = factory.Sequence(lambda n: f"user_{n}@example.com")
    password = factory.PostGenerationMethodCall("set_password", "defaultpassword")
    is_active = True


class StaffFactory(UserFactory):
    is_staff = True
    username = factory.Sequence(lambda n: f"staff_{n}")
    email = factory.Sequence(lambda n: f"staff_{n}@example.com")


class ProductFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = Product

    id = factory.LazyFunction(uuid.uuid4)
    name = factory.Sequence(lambda n: f"Product {n}")
    description = factory.Faker("text", max_nb_chars=200)
    category = factory.Iterator([choice[0] for choice in Product.CATEGORY_CHOICES])
    price = factory.LazyFunction(lambda: Decimal(f"{random.randint(10, 500)}.00"))
    status = "available"
    stock_quantity = factory.Faker("random_int", min=0, max=10)
    materials = factory.LazyFunction(lambda: ", ".join(fake.words(nb=2)))
    dimensions = factory.LazyFunction(
        lambda: {"width": random.randint(20, 200), "height": random.randint(20, 300), "unit": "cm"}
    )


class ProductImageFactory(factory.django.DjangoModelFactory):
    class Meta:
        model = ProductImage

    id = factory.LazyFunction(uuid.uuid4)
    product = factory.SubFactory(ProductFactory)
    storage_key = factory.LazyFunction(lambda: f"{uuid.uuid4().hex}.jpg")
    url = factory.LazyAttribute(lambda o: f"http://testserver/uploads/products/{o.storage_key}")
    original_filename = factory.LazyFunction(lambda: fake.file_name(extension="jpg"))
    file_size = factory.Faker("random_int", min=1024, max=1024 * 1024)
    content_type = "image/jpeg"
    show_on_home = False
    sort_order = factory.Sequence(lambda n: n)
