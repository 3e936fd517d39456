from datetime import datetime
from typing import List, Optional

from sqlalchemy import JSON, DateTime, ForeignKey, Integer, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .database import Base


class Customer(Base):
    __tablename__ = "customers"
    __table_args__ = {'extend_existing': True}

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    name_kana: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    phone: Mapped[Optional[str]] = mapped_column(String(32), nullable=True, index=True)
    address: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    birthday: Mapped[Optional[str]] = mapped_column(String(32), nullable=True)
    job: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )

    devices: Mapped[List["Device"]] = relationship("Device", back_populates="customer")
    assessments: Mapped[List["Assessment"]] = relationship("Assessment", back_populates="customer")


class Device(Base):
    __tablename__ = "devices"
    __table_args__ = {'extend_existing': True}

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    customer_id: Mapped[Optional[int]] = mapped_column(ForeignKey("customers.id"), nullable=True)
    model_name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    model_number: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    imei: Mapped[Optional[str]] = mapped_column(String(32), nullable=True, index=True)
    serial: Mapped[Optional[str]] = mapped_column(String(32), nullable=True)
    color: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    capacity: Mapped[Optional[str]] = mapped_column(String(32), nullable=True)
    carrier: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    sim_lock: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)
    battery: Mapped[Optional[str]] = mapped_column(String(8), nullable=True)
    condition: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    max_price: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    estimated_price: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    ocr_warnings: Mapped[Optional[list]] = mapped_column(JSON, nullable=True)  # warnings shown at intake
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    customer: Mapped[Optional["Customer"]] = relationship(Customer, back_populates="devices")


class Assessment(Base):
    __tablename__ = "assessments"
    __table_args__ = {'extend_existing': True}

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    customer_id: Mapped[Optional[int]] = mapped_column(ForeignKey("customers.id"), nullable=True)
    device_id: Mapped[Optional[int]] = mapped_column(ForeignKey("devices.id"), nullable=True)
    chatwork_text: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    max_price: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    estimated_price: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    assessed_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    customer: Mapped[Optional["Customer"]] = relationship(Customer, back_populates="assessments")
    device: Mapped[Optional["Device"]] = relationship(Device)
