from sqlalchemy import CheckConstraint, Column, Float, ForeignKey, Index, Integer, Text, UniqueConstraint, text

from sqlalchemy.orm import declarative_base, relationship

Base = declarative_base()
metadata = Base.metadata


APPOINTMENT_STATUSES = ("pending", "confirmed", "cancelled", "completed")


class Company(Base):
    __tablename__ = 'company'

    name = Column(Text, nullable=False)
    slug = Column(Text, nullable=False, unique=True)
    id = Column(Integer, primary_key=True)
    description = Column(Text)
    is_active = Column(Integer, nullable=False, server_default=text('1'))
    created_at = Column(Text, server_default=text('CURRENT_TIMESTAMP'))

    opening_rules = relationship('OpeningRules', back_populates='company', order_by='OpeningRules.weekday')
    services = relationship('Services', back_populates='company')
    specialists = relationship('Specialists', back_populates='company')
    appointments = relationship('Appointments', back_populates='company')


class OpeningRules(Base):
    __tablename__ = 'opening_rules'
    __table_args__ = (
        UniqueConstraint('company_id', 'weekday'),
        CheckConstraint('weekday BETWEEN 0 AND 6'),
    )

    company_id = Column(ForeignKey('company.id', ondelete='CASCADE'), nullable=False)
    weekday = Column(Integer, nullable=False)  # 0 = Monday … 6 = Sunday
    opens_at = Column(Text, nullable=False, server_default=text("'09:00'"))
    closes_at = Column(Text, nullable=False, server_default=text("'18:00'"))
    is_closed = Column(Integer, nullable=False, server_default=text('0'))
    id = Column(Integer, primary_key=True)

    company = relationship('Company', back_populates='opening_rules')


class Services(Base):
    __tablename__ = 'services'
    __table_args__ = (
        CheckConstraint('duration_min > 0'),
    )

    company_id = Column(ForeignKey('company.id', ondelete='CASCADE'), nullable=False)
    name = Column(Text, nullable=False)
    duration_min = Column(Integer, nullable=False)
    price = Column(Float, nullable=False, server_default=text('0'))
    is_active = Column(Integer, nullable=False, server_default=text('1'))
    id = Column(Integer, primary_key=True)
    description = Column(Text)

    company = relationship('Company', back_populates='services')
    appointments = relationship('Appointments', back_populates='service')


class Specialists(Base):
    __tablename__ = 'specialists'

    company_id = Column(ForeignKey('company.id', ondelete='CASCADE'), nullable=False)
    display_name = Column(Text, nullable=False)
    is_active = Column(Integer, nullable=False, server_default=text('1'))
    id = Column(Integer, primary_key=True)
    email = Column(Text)
    phone = Column(Text)
    specialty = Column(Text)

    company = relationship('Company', back_populates='specialists')
    appointments = relationship('Appointments', back_populates='specialist')


class Appointments(Base):
    __tablename__ = 'appointments'
    __table_args__ = (
        Index('ix_appointments_company_date', 'company_id', 'date'),
    )

    company_id = Column(ForeignKey('company.id', ondelete='CASCADE'), nullable=False)
    service_id = Column(ForeignKey('services.id'), nullable=False)
    specialist_id = Column(ForeignKey('specialists.id'))
    date = Column(Text, nullable=False)        # YYYY-MM-DD
    start_time = Column(Text, nullable=False)  # HH:MM
    end_time = Column(Text, nullable=False)    # HH:MM, start + duration at creation
    client_name = Column(Text, nullable=False)
    client_email = Column(Text, nullable=False)
    client_phone = Column(Text, nullable=False)
    price = Column(Float, nullable=False, server_default=text('0'))
    status = Column(Text, nullable=False, server_default=text("'pending'"))
    created_at = Column(Text, nullable=False, server_default=text('CURRENT_TIMESTAMP'))
    updated_at = Column(Text, nullable=False, server_default=text('CURRENT_TIMESTAMP'))
    id = Column(Integer, primary_key=True)
    notes = Column(Text)

    company = relationship('Company', back_populates='appointments')
    service = relationship('Services', back_populates='appointments')
    specialist = relationship('Specialists', back_populates='appointments')
