"""IP-XACT documents shared by the tests."""

SPIRIT_URI = "http://www.spiritconsortium.org/XMLSchema/SPIRIT/1685-2009"
XILINX_URI = "http://www.xilinx.com"

NAMESPACES = f'xmlns:spirit="{SPIRIT_URI}" xmlns:xilinx="{XILINX_URI}"'


def ref(tag, vendor, library, name, version="1.0"):
    return (
        f'<spirit:{tag} spirit:vendor="{vendor}" spirit:library="{library}" '
        f'spirit:name="{name}" spirit:version="{version}"/>'
    )


AXIMM_ABSDEF = f"""<?xml version="1.0" encoding="UTF-8"?>
<spirit:abstractionDefinition {NAMESPACES}>
  <spirit:vendor>xilinx.com</spirit:vendor>
  <spirit:library>interface</spirit:library>
  <spirit:name>aximm_rtl</spirit:name>
  <spirit:version>1.0</spirit:version>
  {ref("busType", "xilinx.com", "interface", "aximm")}
  <spirit:ports>
    <spirit:port>
      <spirit:logicalName>AWADDR</spirit:logicalName>
      <spirit:wire>
        <spirit:qualifier><spirit:isAddress>true</spirit:isAddress></spirit:qualifier>
        <spirit:onMaster>
          <spirit:presence>required</spirit:presence>
          <spirit:width>32</spirit:width>
          <spirit:direction>out</spirit:direction>
        </spirit:onMaster>
      </spirit:wire>
    </spirit:port>
  </spirit:ports>
</spirit:abstractionDefinition>
"""

CLOCK_ABSDEF = f"""<?xml version="1.0" encoding="UTF-8"?>
<spirit:abstractionDefinition {NAMESPACES}>
  <spirit:vendor>xilinx.com</spirit:vendor>
  <spirit:library>signal</spirit:library>
  <spirit:name>clock_rtl</spirit:name>
  <spirit:version>1.0</spirit:version>
  {ref("busType", "xilinx.com", "signal", "clock")}
  <spirit:ports>
    <spirit:port>
      <spirit:logicalName>CLK</spirit:logicalName>
      <spirit:wire>
        <spirit:qualifier><spirit:isClock>true</spirit:isClock></spirit:qualifier>
        <spirit:onMaster>
          <spirit:width>1</spirit:width>
          <spirit:direction>out</spirit:direction>
        </spirit:onMaster>
      </spirit:wire>
    </spirit:port>
  </spirit:ports>
</spirit:abstractionDefinition>
"""

GPIO_ABSDEF = f"""<?xml version="1.0" encoding="UTF-8"?>
<spirit:abstractionDefinition {NAMESPACES}>
  <spirit:vendor>acme.com</spirit:vendor>
  <spirit:library>interface</spirit:library>
  <spirit:name>gpio_rtl</spirit:name>
  <spirit:version>1.0</spirit:version>
  {ref("busType", "acme.com", "interface", "gpio")}
  <spirit:ports>
    <spirit:port>
      <spirit:logicalName>DATA_O</spirit:logicalName>
      <spirit:wire>
        <spirit:onMaster>
          <spirit:width>8</spirit:width>
          <spirit:direction>out</spirit:direction>
        </spirit:onMaster>
        <spirit:onSlave>
          <spirit:width>8</spirit:width>
          <spirit:direction>in</spirit:direction>
        </spirit:onSlave>
      </spirit:wire>
    </spirit:port>
    <spirit:port>
      <spirit:logicalName>DATA_I</spirit:logicalName>
      <spirit:wire>
        <spirit:onSlave>
          <spirit:width>8</spirit:width>
          <spirit:direction>out</spirit:direction>
        </spirit:onSlave>
      </spirit:wire>
    </spirit:port>
    <spirit:port>
      <spirit:logicalName>UNSIZED</spirit:logicalName>
      <spirit:wire>
        <spirit:onMaster>
          <spirit:direction>out</spirit:direction>
        </spirit:onMaster>
      </spirit:wire>
    </spirit:port>
  </spirit:ports>
</spirit:abstractionDefinition>
"""

AXIMM_BUSDEF = f"""<?xml version="1.0" encoding="UTF-8"?>
<spirit:busDefinition {NAMESPACES}>
  <spirit:vendor>xilinx.com</spirit:vendor>
  <spirit:library>interface</spirit:library>
  <spirit:name>aximm</spirit:name>
  <spirit:version>1.0</spirit:version>
  <spirit:directConnection>true</spirit:directConnection>
  <spirit:isAddressable>true</spirit:isAddressable>
  <spirit:maxMasters>1</spirit:maxMasters>
  <spirit:maxSlaves>16</spirit:maxSlaves>
</spirit:busDefinition>
"""

AXIMM_CATALOG = f"""<?xml version="1.0" encoding="UTF-8"?>
<xilinx:parameterAbstractionDefinition {NAMESPACES}>
  <xilinx:vendor>xilinx.com</xilinx:vendor>
  <xilinx:library>interface.param</xilinx:library>
  <xilinx:name>aximm</xilinx:name>
  <xilinx:version>1.0</xilinx:version>
  <xilinx:parameterAbstraction xilinx:logicalName="PROTOCOL" spirit:format="string" xilinx:default="AXI4" xilinx:provider="master" xilinx:required="true" xilinx:usage="all" xilinx:permission="read-write"/>
  <xilinx:parameterAbstraction xilinx:logicalName="DATA_WIDTH" spirit:format="long" xilinx:default="32" xilinx:provider="master"/>
  <xilinx:parameterAbstraction xilinx:logicalName="ADDR_WIDTH" spirit:format="long" xilinx:default="32"/>
  <xilinx:parameterAbstraction xilinx:logicalName="HAS_WSTRB" spirit:format="long" xilinx:default="1"/>
</xilinx:parameterAbstractionDefinition>
"""


def bus_interface(name, mode, abstraction, bus_type=("xilinx.com", "interface", "aximm")):
    abstraction_ref = ref("abstractionType", *abstraction) if abstraction else ""
    return f"""
    <spirit:busInterface>
      <spirit:name>{name}</spirit:name>
      {ref("busType", *bus_type)}
      {abstraction_ref}
      <spirit:{mode}/>
      <spirit:portMaps>
        <spirit:portMap>
          <spirit:logicalPort><spirit:name>AWADDR</spirit:name></spirit:logicalPort>
          <spirit:physicalPort>
            <spirit:name>{name.lower()}_awaddr</spirit:name>
            <spirit:vector><spirit:left>31</spirit:left><spirit:right>0</spirit:right></spirit:vector>
          </spirit:physicalPort>
        </spirit:portMap>
      </spirit:portMaps>
    </spirit:busInterface>"""


AXIMM_RTL = ("xilinx.com", "interface", "aximm_rtl")
CLOCK_RTL = ("xilinx.com", "signal", "clock_rtl")
GPIO_RTL = ("acme.com", "interface", "gpio_rtl")

WIDGET_COMPONENT = f"""<?xml version="1.0" encoding="UTF-8"?>
<spirit:component {NAMESPACES}>
  <spirit:vendor>acme.com</spirit:vendor>
  <spirit:library>ip</spirit:library>
  <spirit:name>widget</spirit:name>
  <spirit:version>1.0</spirit:version>
  <spirit:busInterfaces>
    {bus_interface("M_AXI", "master", AXIMM_RTL)}
    {bus_interface("M_AXI_HP0", "master", AXIMM_RTL)}
    {bus_interface("S_AXI", "mirroredMaster", AXIMM_RTL)}
    {bus_interface("CLK", "slave", CLOCK_RTL, ("xilinx.com", "signal", "clock"))}
    {bus_interface("GPIO", "master", GPIO_RTL, ("acme.com", "interface", "gpio"))}
    {bus_interface("SYS_CLK", "system", CLOCK_RTL, ("xilinx.com", "signal", "clock"))}
    {bus_interface("MISSING", "master", ("acme.com", "interface", "nothing_rtl"))}
    {bus_interface("UNTYPED", "master", None)}
  </spirit:busInterfaces>
</spirit:component>
"""


def configurable(reference_id, value):
    return (
        f'<spirit:configurableElementValue spirit:referenceId="{reference_id}">'
        f"{value}</spirit:configurableElementValue>"
    )


WIDGET_DESIGN = f"""<?xml version="1.0" encoding="UTF-8"?>
<spirit:design {NAMESPACES}>
  <spirit:vendor>xilinx.com</spirit:vendor>
  <spirit:library>xci</spirit:library>
  <spirit:name>unknown</spirit:name>
  <spirit:version>1.0</spirit:version>
  <spirit:componentInstances>
    <spirit:componentInstance>
      <spirit:instanceName>widget_0</spirit:instanceName>
      {ref("componentRef", "acme.com", "ip", "widget")}
      <spirit:configurableElementValues>
        {configurable("BUSIFPARAM_VALUE.M_AXI.DATA_WIDTH", "64")}
        {configurable("BUSIFPARAM_VALUE.M_AXI.HAS_BURST", "1")}
        {configurable("BUSIFPARAM_VALUE.M_AXI_HP0.DATA_WIDTH", "128")}
        {configurable("BUSIFPARAM_VALUE.S_AXI.PROTOCOL", "AXI4LITE")}
        {configurable("BUSIFPARAM_VALUE.CLK.PORTWIDTH", "1")}
        {configurable("MODELPARAM_VALUE.C_FAMILY", "zynquplus")}
      </spirit:configurableElementValues>
    </spirit:componentInstance>
    <spirit:componentInstance>
      <spirit:instanceName>widget_1</spirit:instanceName>
      {ref("componentRef", "acme.com", "ip", "widget")}
    </spirit:componentInstance>
  </spirit:componentInstances>
</spirit:design>
"""

FOREIGN_XML = """<?xml version="1.0" encoding="UTF-8"?>
<project><name>not metadata</name></project>
"""

MALFORMED_XML = f"""<?xml version="1.0" encoding="UTF-8"?>
<spirit:busDefinition {NAMESPACES}>
  <spirit:vendor>acme.com</spirit:vendor>
"""


