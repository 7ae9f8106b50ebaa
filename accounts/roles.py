USER = 'user'
KASIR = 'kasir'
ADMIN = 'admin'

ROLE_CHOICES = (
    (USER, 'User'),
    (KASIR, 'Kasir'),
    (ADMIN, 'Admin'),
)
