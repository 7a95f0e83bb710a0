"""
db/init_db.py
-------------
Creates the database schema (tables) if they do not already exist.
Run this module directly to initialize a fresh database:
    python -m db.init_db
"""

from db.connection import get_connection, release_connection
from utils.logger import get_logger

logger = get_logger(__name__)

SCHEMA_SQL = """
-- Users table: customers, managers and riders
CREATE TABLE IF NOT EXISTS users (
    id              SERIAL PRIMARY KEY,
    username        VARCHAR(64) UNIQUE NOT NULL,
    password        CHAR(64) NOT NULL,  -- SHA-256 hex digest
    first_name      VARCHAR(128),
    last_name       VARCHAR(128),
    birth_date      DATE NOT NULL,
    role            VARCHAR(16) NOT NULL DEFAULT 'Customer'
                    CHECK (role IN ('Customer', 'Manager', 'Rider'))
);

-- Catalog: categories and the food inside them (previews are JPEG bytes)
CREATE TABLE IF NOT EXISTS categories (
    id              SERIAL PRIMARY KEY,
    title           VARCHAR(128) NOT NULL,
    description     TEXT,
    preview         BYTEA
);

CREATE TABLE IF NOT EXISTS food (
    id              SERIAL PRIMARY KEY,
    title           VARCHAR(128) NOT NULL,
    description     TEXT,
    preview         BYTEA,
    category_id     INT NOT NULL REFERENCES categories(id) ON DELETE RESTRICT,
    count           INT NOT NULL DEFAULT 0 CHECK (count >= 0),
    is_alcohol      BOOLEAN NOT NULL,
    price           NUMERIC(7,2) NOT NULL CHECK (price >= 0)
);

-- Delivery addresses owned by a user
CREATE TABLE IF NOT EXISTS addresses (
    id              SERIAL PRIMARY KEY,
    customer_id     INT NOT NULL REFERENCES users(id) ON DELETE CASCADE,
    locality        VARCHAR(128) NOT NULL,
    street          VARCHAR(128) NOT NULL,
    house           INT NOT NULL,
    corps           VARCHAR(16),
    apartment       VARCHAR(16)
);

-- Cart lines: at most one per (customer, food)
CREATE TABLE IF NOT EXISTS cart (
    id              SERIAL PRIMARY KEY,
    customer_id     INT NOT NULL REFERENCES users(id) ON DELETE CASCADE,
    food_id         INT NOT NULL REFERENCES food(id) ON DELETE CASCADE,
    count           INT NOT NULL DEFAULT 1 CHECK (count > 0),
    add_time        TIMESTAMP NOT NULL DEFAULT CURRENT_TIMESTAMP,
    CONSTRAINT food_per_customer UNIQUE (customer_id, food_id)
);

-- Favorites: at most one per (user, food)
CREATE TABLE IF NOT EXISTS favorites (
    id              SERIAL PRIMARY KEY,
    user_id         INT NOT NULL REFERENCES users(id) ON DELETE CASCADE,
    food_id         INT NOT NULL REFERENCES food(id) ON DELETE CASCADE,
    add_time        TIMESTAMP NOT NULL DEFAULT CURRENT_TIMESTAMP,
    CONSTRAINT food_per_user UNIQUE (user_id, food_id)
);

-- Orders: claimed by a rider, later completed
CREATE TABLE IF NOT EXISTS orders (
    id              SERIAL PRIMARY KEY,
    customer_id     INT NOT NULL REFERENCES users(id) ON DELETE CASCADE,
    address_id      INT NOT NULL REFERENCES addresses(id) ON DELETE RESTRICT,
    create_time     TIMESTAMP NOT NULL DEFAULT CURRENT_TIMESTAMP,
    rider_id        INT REFERENCES users(id) ON DELETE SET NULL,
    completed_time  TIMESTAMP
);

-- Order lines: quantity and unit price frozen at checkout
CREATE TABLE IF NOT EXISTS orders_food (
    id              SERIAL PRIMARY KEY,
    order_id        INT NOT NULL REFERENCES orders(id) ON DELETE CASCADE,
    food_id         INT NOT NULL REFERENCES food(id) ON DELETE CASCADE,
    count           INT NOT NULL DEFAULT 1 CHECK (count > 0),
    price           NUMERIC(7,2) NOT NULL,
    CONSTRAINT food_per_order UNIQUE (order_id, food_id)
);

-- Feedback: one per order, rating and/or comment
CREATE TABLE IF NOT EXISTS feedbacks (
    id              SERIAL PRIMARY KEY,
    order_id        INT UNIQUE NOT NULL REFERENCES orders(id) ON DELETE CASCADE,
    rating          SMALLINT CHECK (rating >= 0 AND rating <= 5),
    comment         TEXT,
    CHECK (rating IS NOT NULL OR comment IS NOT NULL)
);

CREATE TABLE IF NOT EXISTS notifications (
    id              SERIAL PRIMARY KEY,
    user_id         INT NOT NULL REFERENCES users(id) ON DELETE CASCADE,
    sent_time       TIMESTAMP NOT NULL DEFAULT CURRENT_TIMESTAMP,
    title           VARCHAR(128) NOT NULL,
    description     TEXT
);

-- Indexes for faster queries
CREATE INDEX IF NOT EXISTS idx_food_category ON food(category_id);
CREATE INDEX IF NOT EXISTS idx_addresses_customer ON addresses(customer_id);
CREATE INDEX IF NOT EXISTS idx_orders_customer ON orders(customer_id);
CREATE INDEX IF NOT EXISTS idx_orders_food_order ON orders_food(order_id);
CREATE INDEX IF NOT EXISTS idx_notifications_user ON notifications(user_id, sent_time);
"""


def create_tables() -> None:
    """
    Execute the schema SQL to create all tables.
    Safe to call multiple times (uses IF NOT EXISTS).
    """
    conn = get_connection()
    try:
        with conn.cursor() as cur:
            cur.execute(SCHEMA_SQL)
        conn.commit()
        logger.info("Database schema initialized successfully.")
    except Exception as e:
        conn.rollback()
        logger.error(f"Failed to initialize schema: {e}")
        raise
    finally:
        release_connection(conn)


if __name__ == "__main__":
    from db.connection import init_pool, close_pool
    init_pool()
    create_tables()
    close_pool()
