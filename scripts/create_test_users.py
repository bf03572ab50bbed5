"""
Script para crear las tablas y usuarios de prueba
"""
from app.config.database import SessionLocal, engine, transaction
from app.shared.database.models import Base, Role, User
from app.core.auth.service import AuthService

TEST_USERS = [
    {
        "email": "admin@tallerpro.com",
        "password": "admin123",
        "first_name": "Ana",
        "last_name": "Administradora",
        "phone": "999000111",
        "role": Role.ADMIN
    },
    {
        "email": "tecnico@tallerpro.com",
        "password": "tecnico123",
        "first_name": "Juan",
        "last_name": "Técnico",
        "phone": "999000222",
        "role": Role.TECHNICIAN
    }
]

def create_test_users():
    """Crear tablas y un usuario de prueba por rol"""

    Base.metadata.create_all(bind=engine)

    db = SessionLocal()

    try:
        existing_users = db.query(User).count()
        if existing_users > 0:
            print(f"✅ Ya existen {existing_users} usuarios en la base de datos")
            return

        with transaction(db):
            for user_data in TEST_USERS:
                db.add(User(
                    email=user_data["email"],
                    password_hash=AuthService.get_password_hash(user_data["password"]),
                    first_name=user_data["first_name"],
                    last_name=user_data["last_name"],
                    phone=user_data["phone"],
                    role=user_data["role"],
                    is_active=True
                ))
                print(f"✅ Usuario creado: {user_data['email']} ({user_data['role'].value})")

        print("\n📋 Credenciales de prueba:")
        for user_data in TEST_USERS:
            print(f"   👤 {user_data['role'].value}: {user_data['email']} / {user_data['password']}")

    finally:
        db.close()

if __name__ == "__main__":
    create_test_users()
